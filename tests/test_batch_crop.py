"""Tests for the batch crop pipeline and the Pillow backend."""

from pathlib import Path

import pytest
from PIL import Image

from batchcrop.errors import ImageLoadError
from batchcrop.geometry import CropRect, ImageSize
from batchcrop.processing import (
    PillowCropBackend,
    batch_crop,
    can_start_crop,
    collect_image_files,
    output_path_for,
)


def _make_image(path: Path, size=(200, 100), color=(200, 30, 30)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color).save(path)
    return path


@pytest.fixture
def backend():
    return PillowCropBackend()


def test_read_size(tmp_path, backend):
    source = _make_image(tmp_path / "a.png", (320, 240))
    assert backend.read_size(source) == ImageSize(320, 240)


def test_read_size_rejects_non_images(tmp_path, backend):
    broken = tmp_path / "broken.jpg"
    broken.write_text("not an image")
    with pytest.raises(ImageLoadError):
        backend.read_size(broken)


def test_crop_writes_requested_box(tmp_path, backend):
    source = _make_image(tmp_path / "a.jpg", (200, 100))
    destination = backend.crop(source, CropRect(10, 20, 50, 40), tmp_path / "out" / "a.jpg")
    with Image.open(destination) as cropped:
        assert cropped.size == (50, 40)


def test_output_path_for(tmp_path):
    assert output_path_for(Path("/photos/cat.JPG"), tmp_path) == tmp_path / "cat_cropped.JPG"
    assert output_path_for(Path("dog.png"), tmp_path, "_x") == tmp_path / "dog_x.png"


def test_can_start_crop():
    files = [Path("a.png")]
    assert can_start_crop(files, CropRect(0, 0, 10, 10))
    assert not can_start_crop([], CropRect(0, 0, 10, 10))
    assert not can_start_crop(files, None)
    assert not can_start_crop(files, CropRect(0, 0, 0, 10))


def test_batch_crop_all_files(tmp_path, backend):
    files = [_make_image(tmp_path / "in" / name) for name in ("a.png", "b.png")]
    out_dir = tmp_path / "out"

    results = batch_crop(files, CropRect(10, 10, 50, 40), backend, out_dir)

    assert [result.success for result in results] == [True, True]
    assert [result.output_file for result in results] == [
        out_dir / "a_cropped.png",
        out_dir / "b_cropped.png",
    ]
    for result in results:
        with Image.open(result.output_file) as cropped:
            assert cropped.size == (50, 40)


def test_batch_crop_constrains_rect_per_file(tmp_path, backend):
    """A rect drawn on a large image is clamped to smaller files."""
    small = _make_image(tmp_path / "small.png", (30, 30))
    results = batch_crop([small], CropRect(10, 10, 50, 40), backend, tmp_path / "out")
    with Image.open(results[0].output_file) as cropped:
        assert cropped.size == (30, 30)


def test_batch_crop_continues_after_failure(tmp_path, backend):
    good = _make_image(tmp_path / "good.png")
    broken = tmp_path / "broken.png"
    broken.write_bytes(b"garbage")
    also_good = _make_image(tmp_path / "also_good.png")

    results = batch_crop([good, broken, also_good], CropRect(0, 0, 20, 20), backend, tmp_path / "out")

    assert [result.success for result in results] == [True, False, True]
    assert results[1].input_file == broken
    assert results[1].output_file is None
    assert results[1].error


def test_batch_crop_reports_progress(tmp_path, backend):
    files = [_make_image(tmp_path / f"{index}.png") for index in range(4)]
    updates = []

    batch_crop(
        files,
        CropRect(0, 0, 20, 20),
        backend,
        tmp_path / "out",
        progress_callback=updates.append,
    )

    assert [update.current for update in updates] == [0, 1, 2, 3, 4]
    assert [update.progress for update in updates] == [0, 25, 50, 75, 100]
    assert updates[0].current_file == "0.png"
    assert updates[-1].current_file == "done"
    assert all(update.total == 4 for update in updates)


def test_batch_crop_does_not_overwrite(tmp_path, backend):
    """Existing outputs and same-named inputs get a counter suffix."""
    out_dir = tmp_path / "out"
    _make_image(out_dir / "a_cropped.png")
    first = _make_image(tmp_path / "one" / "a.png")
    second = _make_image(tmp_path / "two" / "a.png")

    results = batch_crop([first, second], CropRect(0, 0, 20, 20), backend, out_dir)

    assert [result.output_file for result in results] == [
        out_dir / "a_cropped (1).png",
        out_dir / "a_cropped (2).png",
    ]


def test_batch_crop_with_workers_keeps_order(tmp_path, backend):
    files = [_make_image(tmp_path / f"img{index}.png") for index in range(6)]
    updates = []

    results = batch_crop(
        files,
        CropRect(0, 0, 20, 20),
        backend,
        tmp_path / "out",
        progress_callback=updates.append,
        max_workers=3,
    )

    assert [result.input_file for result in results] == files
    assert all(result.success for result in results)
    # Each completion is counted once, then the final "done" update follows.
    assert [update.current for update in updates] == [1, 2, 3, 4, 5, 6, 6]
    assert updates[-1].progress == 100
    assert updates[-1].current_file == "done"


def test_collect_image_files(tmp_path):
    folder = tmp_path / "photos"
    b = _make_image(folder / "B.JPG")
    a = _make_image(folder / "a.png")
    (folder / "notes.txt").write_text("skip me")
    single = _make_image(tmp_path / "single.webp")

    collected = collect_image_files([single, folder, a])

    assert collected == [single, a, b]

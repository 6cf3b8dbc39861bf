"""Qt front end for picking a crop rectangle."""

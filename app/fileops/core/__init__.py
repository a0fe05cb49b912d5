"""Core building blocks shared by all fileops components."""

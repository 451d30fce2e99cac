"""HTTP routing layer for the Speedy proxy."""

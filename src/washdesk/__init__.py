"""Admin dashboard for a vehicle-cleaning business."""

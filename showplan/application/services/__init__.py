"""Application services: version guard, reconciler, snapshots, plan checks."""

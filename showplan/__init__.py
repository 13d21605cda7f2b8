"""Showplan: live-show schedule planning, reconciliation and publishing service."""

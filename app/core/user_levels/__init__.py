"""Per-user level progress (unlocked / completed flags)."""

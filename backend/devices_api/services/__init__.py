"""Services Layer — device lifecycle policy over the repository contract."""

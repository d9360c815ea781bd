"""Terminal calendar with events expanded from a plain-text rule file."""

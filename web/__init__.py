"""Web presentation shell for the notifier."""

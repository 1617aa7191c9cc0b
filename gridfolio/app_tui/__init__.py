"""Terminal front end for the editing session."""

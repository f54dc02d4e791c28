"""langreload test suite."""

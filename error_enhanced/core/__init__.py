"""Core building blocks of error_enhanced."""

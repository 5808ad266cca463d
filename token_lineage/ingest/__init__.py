"""Loading token lists from files."""

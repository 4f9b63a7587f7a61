"""Pages of the lovememories UI."""

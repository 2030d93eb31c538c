"""Connect-four game service with a pluggable computer opponent."""

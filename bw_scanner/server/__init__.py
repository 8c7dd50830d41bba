"""HTTP server exposing the scan result as JSON."""

"""Content-Encoding sniffing for UnityWeb static files."""

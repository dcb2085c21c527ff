"""HTTP gateway clients for the Foodies API."""

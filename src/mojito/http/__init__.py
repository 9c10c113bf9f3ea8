"""HTTP message types — headers, parameters, assets, request and response."""

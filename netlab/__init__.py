"""Small socket programs: address conversions, calculators, select and event-driven echo servers, multicast news, file transfer and a tiny web server."""

__version__ = "0.1.0"
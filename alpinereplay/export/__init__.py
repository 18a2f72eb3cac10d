from .gpx_writer import build_gpx, plain_decimal, point_time, to_gpx_string, write_gpx

__all__ = ["build_gpx", "plain_decimal", "point_time", "to_gpx_string", "write_gpx"]

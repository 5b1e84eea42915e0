from .generator import generate_report, write_report

__all__ = ["generate_report", "write_report"]

"""
File collaborators: address list input and CSV report output.
"""

from address_screening.files.address_file import read_addresses
from address_screening.files.csv_report import CsvReportWriter

__all__ = ["CsvReportWriter", "read_addresses"]

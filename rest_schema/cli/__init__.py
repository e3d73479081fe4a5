"""Command line tool for rest_schema."""

from .report import ValidationReport
from .run_cli import main, validate_files

__all__ = ['main', 'validate_files', 'ValidationReport']

"""Result reporting: workflow commands, outputs and the failure handler.

Public API:
    ResultReporter(output_file) -> reporter
    format_failure(exc) -> str
"""

from report_sender.reporting.reporter import ResultReporter, format_failure

__all__ = ["ResultReporter", "format_failure"]

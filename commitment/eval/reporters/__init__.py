"""Evaluation reporters: console progress, JSON results and markdown reports."""

from commitment.eval.reporters.cli_reporter import CLIReporter
from commitment.eval.reporters.json_reporter import JSONReporter
from commitment.eval.reporters.markdown_reporter import MarkdownReporter, render_report

__all__ = ["CLIReporter", "JSONReporter", "MarkdownReporter", "render_report"]

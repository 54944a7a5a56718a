"""Reporter interface and shared rendering helpers."""

import io
import logging
from typing import BinaryIO, Callable, List, Sequence

from ..results.models import Result

logger = logging.getLogger(__name__)


class ReportError(Exception):
    """Raised when a report cannot be rendered or written."""
    pass


class Reporter:
    """Renders a Results sequence into report bytes."""

    def report(self, results: Sequence[Result]) -> bytes:
        """Render the full report or raise ReportError; never returns partial output."""
        buf = io.StringIO()
        try:
            self.render(buf, results)
        except ReportError:
            raise
        except (OSError, ValueError, TypeError) as e:
            raise ReportError(f"{type(self).__name__} failed: {e}") from e
        return buf.getvalue().encode("utf-8")

    def render(self, out: io.StringIO, results: Sequence[Result]) -> None:
        raise NotImplementedError


class ReporterFunc(Reporter):
    """Adapts a plain ``results -> bytes`` function to the Reporter interface."""

    def __init__(self, func: Callable[[Sequence[Result]], bytes]):
        self.func = func

    def report(self, results: Sequence[Result]) -> bytes:
        try:
            return self.func(results)
        except ReportError:
            raise
        except (OSError, ValueError, TypeError) as e:
            raise ReportError(f"{getattr(self.func, '__name__', 'reporter')} failed: {e}") from e


def write_report(reporter: Reporter, results: Sequence[Result], stream: BinaryIO) -> int:
    """Render a report and write it to ``stream`` in one go.

    Returns:
        Number of bytes written
    """
    data = reporter.report(results)
    try:
        stream.write(data)
        stream.flush()
    except OSError as e:
        raise ReportError(f"Failed to write report: {e}") from e
    logger.info(f"Wrote {len(data)} bytes of {type(reporter).__name__} output")
    return len(data)


def format_table(rows: List[List[str]], padding: int = 2) -> List[str]:
    """Align rows of cells into columns; the last cell of a row is never padded."""
    widths: List[int] = []
    for row in rows:
        for i, cell in enumerate(row[:-1]):
            if i >= len(widths):
                widths.append(0)
            widths[i] = max(widths[i], len(cell))

    lines = []
    for row in rows:
        cells = [cell.ljust(widths[i] + padding) for i, cell in enumerate(row[:-1])]
        cells.append(row[-1] if row else "")
        lines.append("".join(cells).rstrip())
    return lines

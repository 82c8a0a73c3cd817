"""Graphite plaintext line writer."""

import sys
from typing import Optional, TextIO

from ..utils.metrics import MetricLine


class GraphiteEmitter:
    """
    Write ``name value timestamp`` lines to a text stream.

    Defaults to stdout, which is what Sensu/collectd style metric
    handlers read.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        """
        Args:
            stream: Output stream (defaults to sys.stdout at write time)
        """
        self.stream = stream
        self.count = 0

    def write(self, line: MetricLine) -> None:
        stream = self.stream or sys.stdout
        stream.write(line.render() + "\n")
        self.count += 1

    def output(self, name: str, value, timestamp: int) -> None:
        self.write(MetricLine(name=name, value=value, timestamp=timestamp))

    def flush(self) -> None:
        (self.stream or sys.stdout).flush()

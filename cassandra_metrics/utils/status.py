"""Check status enumeration."""

from enum import Enum


class CheckStatus(Enum):
    """
    Outcome of a collection run, as a Nagios/Sensu check exit code.

    A metric check either emits its lines (OK) or could not run at all
    (UNKNOWN); it never raises threshold states.
    """

    OK = 0
    UNKNOWN = 3

    @property
    def exit_code(self) -> int:
        return self.value

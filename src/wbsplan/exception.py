# SPDX-License-Identifier: MIT


class InvalidInputError(ValueError):
    """Raised when a caller hands the scheduling core structurally invalid data.

    Malformed dates, negative estimates, unknown enumeration values and
    out-of-range positions all end up here. Business outcomes such as a
    schedule overrun are reported as data and never raise.
    """

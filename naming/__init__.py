"""
naming
------

Record codec and validator for a blockchain naming service.

Records attached to a registered name are stored as raw byte payloads. This
package turns them into human-readable values (addresses, IPs, free text),
checks that typed records have the binary shape of their kind, and verifies
the self-certifying signature carried by SOL records.

    from naming.records import RecordType, decode

Submodules document their own APIs.
"""

from __future__ import annotations

from .version import __version__

__all__ = ["__version__"]

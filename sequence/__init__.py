"""
sequence/
---------
Core data layer.  Public API:

    from sequence import SequenceStore, IndexFault
    from sequence import Step, Swap, Overwrite, replay
    from sequence import parse_sequence, InputParseError
"""

from sequence.step  import Step, Swap, Overwrite, replay
from sequence.store import SequenceStore, IndexFault
from sequence.parse import parse_sequence, InputParseError

__all__ = [
    "Step",          "Swap",       "Overwrite",  "replay",
    "SequenceStore", "IndexFault",
    "parse_sequence", "InputParseError",
]

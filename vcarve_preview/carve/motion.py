"""Motion trace builder: tokenized blocks → absolute tool waypoints.

Tracks:
    - Current position (X, Y, Z) in inches, each axis modal
    - Feed rate (F), modal
    - Last motion mode (G0 rapid / G1 linear)

Only blocks carrying a G0 or G1 word are motion commands and produce a
waypoint. Axes omitted from a motion block keep their previous value.
Everything else (other G/M codes, comments, feed-only blocks) is ignored.

Usage:
    from vcarve_preview.carve import motion, tokenizer

    builder = motion.MotionTraceBuilder()
    waypoints = builder.build(tokenizer.tokenize(gcode_text))
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, NamedTuple, Optional

from .tokenizer import Block, ChunkType

logger = logging.getLogger(__name__)


class MotionMode(Enum):
    RAPID = 0
    LINEAR = 1


class Waypoint(NamedTuple):
    """Absolute tool position after a motion command (inches)."""
    x: float
    y: float
    z: float


@dataclass
class MachineState:
    """Modal machine state threaded through the builder."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    feed: Optional[float] = None
    mode: Optional[MotionMode] = None

    def position(self) -> Waypoint:
        return Waypoint(self.x, self.y, self.z)


_AXES = ('X', 'Y', 'Z')


class MotionTraceBuilder:
    """Interprets tokenized blocks into an ordered waypoint sequence.

    Parameters
    ----------
    state : Optional[MachineState]
        Starting state, default origin (0, 0, 0)

    Attributes
    ----------
    state : MachineState
        Current modal state
    block_count : int
        Blocks processed since the last reset
    """

    def __init__(self, state: Optional[MachineState] = None):
        self.state = state if state is not None else MachineState()
        self.block_count = 0

    def reset(self) -> None:
        """Return to the origin and forget modal values."""
        self.state = MachineState()
        self.block_count = 0

    def process_block(self, block: Block) -> Optional[Waypoint]:
        """Interpret one block.

        Parameters
        ----------
        block : Block
            Chunks of one command line

        Returns
        -------
        Optional[Waypoint]
            New position for a G0/G1 block, None otherwise
        """
        self.block_count += 1
        mode: Optional[MotionMode] = None
        addrs = {}

        for chunk in block:
            if chunk.kind is not ChunkType.WORD_ADDRESS:
                continue
            if chunk.word == 'G':
                # G0.5 and friends are not motion words
                if not chunk.float_value().is_integer():
                    continue
                code = chunk.int_value()
                if code in (0, 1):
                    mode = MotionMode(code)
            elif chunk.word in _AXES or chunk.word == 'F':
                addrs[chunk.word] = chunk.float_value()

        if 'F' in addrs:
            self.state.feed = addrs['F']

        if mode is None:
            return None

        self.state.x = addrs.get('X', self.state.x)
        self.state.y = addrs.get('Y', self.state.y)
        self.state.z = addrs.get('Z', self.state.z)
        self.state.mode = mode

        waypoint = self.state.position()
        logger.debug(f"Block {self.block_count}: {mode.name} → {waypoint}")
        return waypoint

    def build(self, blocks: Iterable[Block]) -> List[Waypoint]:
        """Interpret all blocks and return the waypoints in input order."""
        waypoints = []
        for block in blocks:
            waypoint = self.process_block(block)
            if waypoint is not None:
                waypoints.append(waypoint)

        logger.debug(f"Built {len(waypoints)} waypoints from {self.block_count} blocks")
        return waypoints


def build_trace(blocks: Iterable[Block]) -> List[Waypoint]:
    """Build a waypoint trace from a fresh machine state."""
    return MotionTraceBuilder().build(blocks)

"""
Innovation Tracker Module

This module implements the InnovationTracker class, the historical-marking
service handing out innovation numbers to newly created connection genes.

Classes:
    InnovationTracker: Assigns innovation numbers according to a deduplication policy
"""

from itertools import count

from loguru import logger


class InnovationTracker:
    """
    Assigns innovation numbers to the connection genes created by structural mutations.

    The tracker is an explicit collaborator: the genome operators that create
    connection genes receive it as an argument, and every population (or test)
    owns its own instance.

    Whether the same structural change arising independently in two genomes
    receives the same innovation number is a policy choice:
      "global":     a (node_in, node_out) pair keeps its innovation number for
                    the lifetime of the tracker
      "generation": a pair keeps its innovation number until 'new_generation()'
                    is called; afterwards the same pair gets a fresh number
      "none":       every request receives a fresh number

    Public Properties:
        policy: the deduplication policy in use

    Public Methods:
        get_innovation_number(node_in, node_out): Innovation number for a new connection gene
        new_generation():                         Start a new deduplication window
        reset():                                  Restart numbering from scratch
    """

    POLICIES = ("global", "generation", "none")

    def __init__(self, policy: str = "global", start: int = 1):
        """
        Parameters:
            policy: deduplication policy ("global", "generation" or "none")
            start:  first innovation number handed out
        """
        if policy not in self.POLICIES:
            raise ValueError(f"Unknown innovation policy '{policy}', expected one of {self.POLICIES}")

        self._policy = policy
        self._start  = start
        self.reset()

    @property
    def policy(self) -> str:
        return self._policy

    def reset(self) -> None:
        """
        Forget all assigned innovation numbers and restart the counter.
        """
        self._next_innovation_number = count(self._start)

        # (node_in, node_out) -> innovation number
        self._innovation_numbers: dict[tuple[int, int], int] = {}

    def new_generation(self) -> None:
        """
        Close the current deduplication window.
        Only affects the "generation" policy; numbering is never restarted.
        """
        if self._policy == "generation":
            self._innovation_numbers = {}

    def get_innovation_number(self, node_in: int, node_out: int) -> int:
        """
        Get the innovation number for a connection gene, identified by its endpoints.

        Parameters:
            node_in:  node ID for the 'from' end of the connection
            node_out: node ID for the 'to'   end of the connection

        Returns:
            innovation number for the connection
        """
        if self._policy == "none":
            return next(self._next_innovation_number)

        key = (node_in, node_out)
        if key not in self._innovation_numbers:
            self._innovation_numbers[key] = next(self._next_innovation_number)
            logger.debug("New innovation {} for connection {}=>{}",
                         self._innovation_numbers[key], node_in, node_out)

        return self._innovation_numbers[key]

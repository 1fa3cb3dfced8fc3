"""
Debug tracing infrastructure for mindlayout.

A LayoutTrace captures what happened during one layout pass: a snapshot of
data at each pipeline stage and a record of every node that was pruned
because of a cycle or the depth ceiling.

Traces are passed in per call, never stored on the engine, so concurrent
layouts do not share them:

    >>> engine = MindmapLayoutEngine()
    >>> trace = LayoutTrace()
    >>> graph = engine.layout(root, trace=trace)
    >>> print(trace.summary())

Pipeline stages (tree mode):
1. source - shape of the input tree
2. split - left/right assignment of top-level branches
3. left_half / right_half - cursor totals of each half
4. balance - shifts applied to center the halves
5. flatten - node and edge counts
6. bounds - bounding box before the global shift
7. shift - global offset and final canvas size

Radial mode replaces stages 2-4 with a single "radial" stage.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class PruneEvent:
    """
    Record of one node replaced by a synthetic marker leaf.

    Attributes:
        kind: "cycle" or "depth".
        node_id: Id of the input node that was pruned.
        replacement_id: Id given to the marker leaf.
        depth: Depth at which pruning happened.
        path: Ids from the root down to the pruned node's parent.
    """

    kind: str
    node_id: str
    replacement_id: str
    depth: int
    path: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        trail = " > ".join(self.path) if self.path else "(root)"
        return (
            f"[{self.kind}] {self.node_id} -> {self.replacement_id} "
            f"at depth {self.depth} under {trail}"
        )


@dataclass
class PipelineStage:
    """
    Snapshot of state at a pipeline stage.

    Attributes:
        name: Name of this pipeline stage.
        data: Dictionary of relevant data at this stage.
    """

    name: str
    data: Dict[str, Any]

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            # Truncate long values
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        return "\n".join(lines)


@dataclass
class LayoutTrace:
    """
    Complete trace of a layout operation.

    Attributes:
        stages: Pipeline stages in the order they ran.
        pruned: Nodes replaced by marker leaves.
        mode: Layout mode of the traced pass.
    """

    stages: List[PipelineStage] = field(default_factory=list)
    pruned: List[PruneEvent] = field(default_factory=list)
    mode: str = ""

    def add_stage(self, name: str, data: Dict[str, Any]) -> None:
        """
        Add a pipeline stage snapshot.

        Args:
            name: Name of the stage (e.g., "balance").
            data: Dictionary of relevant data at this stage.
        """
        self.stages.append(PipelineStage(name, dict(data)))

    def add_prune(self, event: PruneEvent) -> None:
        """Record a pruned node."""
        self.pruned.append(event)

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get a specific pipeline stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def stage_names(self) -> List[str]:
        return [stage.name for stage in self.stages]

    def get_pruned_by_kind(self, kind: str) -> List[PruneEvent]:
        return [event for event in self.pruned if event.kind == kind]

    def summary(self) -> str:
        """
        Generate a human-readable summary of the trace.

        Returns a string with the mode, the stages that ran and the pruning
        counts by kind.
        """
        lines = [
            "=" * 60,
            "LAYOUT TRACE SUMMARY",
            "=" * 60,
            "",
            f"Mode: {self.mode}",
            "",
            f"Pipeline stages: {len(self.stages)}",
        ]
        for stage in self.stages:
            lines.append(f"  - {stage.name}")

        lines.extend(["", f"Pruned nodes: {len(self.pruned)}"])

        kind_counts: Dict[str, int] = {}
        for event in self.pruned:
            kind_counts[event.kind] = kind_counts.get(event.kind, 0) + 1
        for kind, count in sorted(kind_counts.items(), key=lambda x: -x[1]):
            lines.append(f"  {kind}: {count}")

        return "\n".join(lines)

    def dump(self) -> str:
        """Complete dump: summary, every stage and every pruned node."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]

        lines.append("PIPELINE STAGES:")
        lines.append("-" * 40)
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        lines.append("PRUNED NODES:")
        lines.append("-" * 40)
        for event in self.pruned:
            lines.append(str(event))

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())

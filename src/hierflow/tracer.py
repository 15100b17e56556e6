"""
Debug tracing infrastructure for hierflow.

This module provides data structures for capturing a detailed trace of the
layout pipeline. When debug mode is enabled, the graph records each stage
of a compute pass and every node placement decision.

This is primarily useful for:
1. Debugging layout issues (understanding why a node landed where it did)
2. Understanding the pipeline flow (seeing intermediate results)
3. Writing targeted tests (verifying specific placement decisions)

Usage:
    >>> graph = HierarchyGraph(GraphConfig(gap=Gap(20, 60)))
    >>> result = graph.compute(root, debug=True)
    >>> trace = graph.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("layout_trace.txt")

The trace captures:
- Pipeline stages (validate, place, route)
- Every node placement with depth, position, flow and subtree extent
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class PlacementRecord:
    """
    Record of a single node placement.

    Attributes:
        node_id: Id of the placed node
        depth: Depth from the root
        x: Center x coordinate
        y: Center y coordinate
        flow: Flow that positioned this node ("root", "vertical" or
              "horizontal"), i.e. its parent's resolved direction
        extent: Measured subtree extent along the parent's flow axis
                (height when stacked, width when spread; None for the root)
    """

    node_id: str
    depth: int
    x: float
    y: float
    flow: str
    extent: Optional[float] = None

    def __str__(self) -> str:
        text = f"{self.node_id} @ ({self.x:g},{self.y:g}) depth={self.depth} [{self.flow}]"
        if self.extent is not None:
            text += f" extent={self.extent:g}"
        return text


@dataclass
class PipelineStage:
    """
    Snapshot of state at a pipeline stage.

    Attributes:
        name: Name of this pipeline stage
        data: Dictionary of relevant data at this stage
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
    Complete trace of a compute pass.

    Attributes:
        stages: List of pipeline stages with their data
        placements: List of all node placements, in placement order
        root_id: Id of the root node that was laid out
        direction: The default flow direction
    """

    stages: List[PipelineStage] = field(default_factory=list)
    placements: List[PlacementRecord] = field(default_factory=list)
    root_id: str = ""
    direction: str = "horizontal"

    def add_stage(self, name: str, data: Dict[str, Any]) -> None:
        """Add a pipeline stage snapshot."""
        self.stages.append(PipelineStage(name, data.copy()))

    def add_placement(
        self,
        node_id: str,
        depth: int,
        x: float,
        y: float,
        flow: str,
        extent: Optional[float] = None,
    ) -> None:
        """Record a node placement."""
        self.placements.append(PlacementRecord(node_id, depth, x, y, flow, extent))

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get a specific pipeline stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def get_placement(self, node_id: str) -> Optional[PlacementRecord]:
        for record in self.placements:
            if record.node_id == node_id:
                return record
        return None

    def get_placements_by_flow(self, flow: str) -> List[PlacementRecord]:
        return [p for p in self.placements if p.flow == flow]

    def summary(self) -> str:
        """
        Generate a human-readable summary of the trace.

        Returns a string with the root, the stages and placement counts.
        """
        lines = [
            "=" * 60,
            "LAYOUT TRACE SUMMARY",
            "=" * 60,
            "",
            f"Root: {self.root_id}",
            f"Direction: {self.direction}",
            "",
            f"Pipeline stages: {len(self.stages)}",
        ]

        for stage in self.stages:
            lines.append(f"  - {stage.name}")

        lines.extend(["", f"Total placements: {len(self.placements)}", ""])

        flow_counts: Dict[str, int] = {}
        for p in self.placements:
            flow_counts[p.flow] = flow_counts.get(p.flow, 0) + 1

        lines.append("Placements by flow:")
        for flow, count in sorted(flow_counts.items(), key=lambda x: -x[1]):
            lines.append(f"  {flow}: {count}")

        return "\n".join(lines)

    def dump(self) -> str:
        """Generate a complete human-readable dump of the trace."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]

        lines.append("PIPELINE STAGES:")
        lines.append("-" * 40)
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        lines.append("PLACEMENTS:")
        lines.append("-" * 40)
        for p in self.placements:
            lines.append(str(p))

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())

"""Export an agent as a Python flow-graph script on the embedded workflow runtime.

Each flow node becomes one AsyncNode subclass, each resolvable edge one
``>>`` link, and the entry node roots an AsyncFlow that ``main()`` runs.
"""

import logging
from typing import Iterable

from agentforge.export.pocketflow_template import POCKETFLOW_SOURCE, POCKETFLOW_TEMPLATE_VERSION
from agentforge.models.agent_config import AgentConfig
from agentforge.models.export_bundle import ExportBundle, ExportTarget
from agentforge.models.flow_graph import FlowData, FlowEdge, FlowNode, FlowNodeType
from agentforge.models.task_config import TaskConfig
from agentforge.utils.identifiers import python_identifier, single_line, type_prefix

logger = logging.getLogger(__name__)


REQUIREMENTS = ["aiohttp", "python-dotenv"]

# used when no flow is supplied so the export still runs standalone
FALLBACK_FLOW = FlowData(
    name="Fallback Flow",
    summary="Minimal start to end flow.",
    nodes=[
        FlowNode(id="start", label="Start", type=FlowNodeType.start, x=0, y=0),
        FlowNode(id="end", label="End", type=FlowNodeType.end, x=0, y=100),
    ],
    edges=[FlowEdge(id="start-end", source="start", target="end")],
)


class _NodeNames:
    """Deterministic class and variable names for the nodes of one flow."""

    def __init__(self, nodes: list[FlowNode]) -> None:
        self.nodes: list[FlowNode] = []
        self.class_names: dict[str, str] = {}
        self.var_names: dict[str, str] = {}

        used: set[str] = set()
        for node in nodes:
            if node.id in self.var_names:
                logger.warning("duplicate flow node id %r, keeping the first", node.id)
                continue

            base = python_identifier(node.id)
            suffix = base
            counter = 2
            while suffix in used:
                suffix = f"{base}_{counter}"
                counter += 1
            used.add(suffix)

            self.nodes.append(node)
            self.class_names[node.id] = f"{type_prefix(node.type.value)}Node_{suffix}"
            self.var_names[node.id] = f"node_{suffix}"


MAIN_HEADER = """import asyncio
import os

from dotenv import load_dotenv

from pocketflow import AsyncFlow, AsyncNode

load_dotenv()

# Configuration
AGENT_NAME = {agent_name}
API_KEY = os.getenv({api_key_env_var})


class AgentContext:
    def __init__(self):
        self.history = []
        self.data = {{}}


# --- NODES ---
"""

NODE_CLASS = """

class {class_name}(AsyncNode):
    async def prep_async(self, shared):
        print("Processing Node:", {label})
        return shared

    async def exec_async(self, prep_res):
        # Logic for {comment}
        return "success"

    async def post_async(self, shared, prep_res, exec_res):
        return "default"
"""

MAIN_FOOTER = """
    # Create Flow
    flow = AsyncFlow(start={entry_var})

    # Run
    print("Starting PocketFlow for", AGENT_NAME)
    await flow.run_async(shared)
    print("Flow Complete.")


if __name__ == "__main__":
    asyncio.run(main())
"""


def render_main_module(agent: AgentConfig, flow: FlowData) -> str:
    """Generate the graph program for ``flow``.

    Configuration values are written as Python literals via ``repr`` and
    labels only reach comments after being collapsed to one line.
    Edges whose endpoints are unknown are left out.
    """
    names = _NodeNames(flow.nodes)

    parts = [MAIN_HEADER.format(
        agent_name=repr(agent.name),
        api_key_env_var=repr(agent.llm.api_key_env_var),
    )]

    for node in names.nodes:
        parts.append(NODE_CLASS.format(
            class_name=names.class_names[node.id],
            label=repr(node.label),
            comment=single_line(node.label or node.id),
        ))

    parts.append("\n\n# --- FLOW ORCHESTRATION ---\n")
    parts.append("async def main():\n")
    parts.append("    shared = AgentContext()\n")
    parts.append("\n    # Instantiate Nodes\n")
    for node in names.nodes:
        parts.append(f"    {names.var_names[node.id]} = {names.class_names[node.id]}()\n")

    for edge in flow.dangling_edges():
        logger.warning(
            "skipping edge %r: %r -> %r references an unknown node",
            edge.id, edge.source, edge.target,
        )

    parts.append("\n    # Define Edges\n")
    for edge in flow.resolved_edges():
        link = f"    {names.var_names[edge.source]} >> {names.var_names[edge.target]}"
        note = single_line(" ".join(filter(None, [edge.label, edge.condition])))
        if note:
            link += f"  # {note}"
        parts.append(link + "\n")

    entry = flow.entry_node()
    parts.append(MAIN_FOOTER.format(entry_var=names.var_names[entry.id]))
    return "".join(parts)


def render_requirements() -> str:
    return "\n".join(REQUIREMENTS) + "\n"


def render_readme(agent: AgentConfig, tasks: list[TaskConfig], flow: FlowData) -> str:
    return f"""# {agent.name} - PocketFlow Agent

This agent uses the lightweight PocketFlow library for orchestration
(bundled as `pocketflow.py`, template version {POCKETFLOW_TEMPLATE_VERSION}).

## Flow
{flow.summary}

The flow has **{len(flow.nodes)}** nodes and **{len(flow.edges)}** edges.
Each node is generated as a class in `main.py`; replace the body of
`exec_async` with the node's real logic.

## Setup
1. Install Python 3.8+
2. `pip install -r requirements.txt`
3. Set env var: `export {agent.llm.api_key_env_var}=your_key`

## Run
`python main.py`

## Tasks
This agent has **{len(tasks)}** defined tasks available for execution.
"""


def export_pocketflow_runtime(
    agent: AgentConfig,
    tasks: Iterable[TaskConfig] = (),
    flow: FlowData | None = None,
) -> ExportBundle:
    """Compile an agent and its flow graph into a runnable Python project.

    Args:
        agent: the agent snapshot to export; read only
        tasks: the team tasks, summarized in the README
        flow: the agent's flow graph; ``None`` or an empty graph exports
            the two-node start -> end fallback

    Returns:
        An ExportBundle with ``pocketflow.py``, ``main.py``,
        ``requirements.txt`` and ``README.md``.
    """
    tasks = list(tasks)
    if flow is None or not flow.nodes:
        flow = FALLBACK_FLOW

    bundle = ExportBundle(target=ExportTarget.pocketflow, agent_slug=agent.slug)
    bundle.add("pocketflow.py", POCKETFLOW_SOURCE)
    bundle.add("main.py", render_main_module(agent, flow))
    bundle.add("requirements.txt", render_requirements())
    bundle.add("README.md", render_readme(agent, tasks, flow))

    logger.debug("exported %s with %d files", bundle.name, len(bundle.files))
    return bundle

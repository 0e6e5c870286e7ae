"""Tests for the Python flow-graph exporter."""

import asyncio
import importlib.util
import re
import sys

import pytest

from agentforge.export.pocketflow_runtime import export_pocketflow_runtime
from agentforge.export.pocketflow_template import POCKETFLOW_SOURCE, POCKETFLOW_TEMPLATE_VERSION
from agentforge.models.flow_graph import FlowData, FlowEdge, FlowNode

CLASS_PATTERN = re.compile(r"^class (\w+)\(AsyncNode\):", re.MULTILINE)


def _flow(nodes, edges=()) -> FlowData:
    return FlowData(
        summary="test flow",
        nodes=[FlowNode(id=i, label=f"Node {i}", type=t) for i, t in nodes],
        edges=[FlowEdge(id=f"{s}->{d}", source=s, target=d) for s, d in edges],
    )


class TestFileLayout:

    def test_files(self, agent, flow):
        bundle = export_pocketflow_runtime(agent, [], flow)
        assert list(bundle.files) == ["pocketflow.py", "main.py", "requirements.txt", "README.md"]
        assert bundle.archive_filename == "support-bot-pocketflow.zip"

    def test_runtime_embedded_verbatim(self, agent, flow):
        bundle = export_pocketflow_runtime(agent, [], flow)
        assert bundle.files["pocketflow.py"] == POCKETFLOW_SOURCE

    def test_requirements(self, agent):
        bundle = export_pocketflow_runtime(agent)
        assert bundle.files["requirements.txt"] == "aiohttp\npython-dotenv\n"

    def test_readme_names_key_env_var(self, agent, team, flow):
        readme = export_pocketflow_runtime(agent, team.tasks, flow).files["README.md"]
        assert "export GEMINI_API_KEY=your_key" in readme
        assert flow.summary in readme
        assert "**2** defined tasks" in readme

    def test_readme_stamps_template_version(self, agent):
        readme = export_pocketflow_runtime(agent).files["README.md"]
        assert f"template version {POCKETFLOW_TEMPLATE_VERSION}" in readme

    def test_deterministic(self, agent, team, flow):
        first = export_pocketflow_runtime(agent, team.tasks, flow)
        second = export_pocketflow_runtime(agent, team.tasks, flow)
        assert first.files == second.files


class TestGeneratedProgram:
    """Test the node classes and wiring emitted into main.py."""

    def test_one_class_per_node(self, agent, flow):
        main = export_pocketflow_runtime(agent, [], flow).files["main.py"]
        assert CLASS_PATTERN.findall(main) == [
            "StartNode_greet",
            "DecisionNode_classify_request",
            "PromptNode_answer",
            "ToolCallNode_create_ticket",
            "EndNode_done",
        ]

    def test_classes_return_default_action(self, agent, flow):
        main = export_pocketflow_runtime(agent, [], flow).files["main.py"]
        assert main.count('return "default"') == len(flow.nodes)

    def test_wiring(self, agent, flow):
        main = export_pocketflow_runtime(agent, [], flow).files["main.py"]
        assert "    node_greet >> node_classify_request\n" in main
        assert "    node_classify_request >> node_answer  # Simple\n" in main
        assert "    node_create_ticket >> node_done\n" in main
        assert "flow = AsyncFlow(start=node_greet)" in main

    def test_labels_are_python_literals(self, agent, flow):
        """Quotes in labels must not break the generated source."""
        main = export_pocketflow_runtime(agent, [], flow).files["main.py"]
        assert "print(\"Processing Node:\", 'Answer \"directly\"')" in main
        compile(main, "main.py", "exec")

    def test_generated_sources_compile(self, agent, flow):
        bundle = export_pocketflow_runtime(agent, [], flow)
        compile(bundle.files["pocketflow.py"], "pocketflow.py", "exec")
        compile(bundle.files["main.py"], "main.py", "exec")

    def test_agent_name_is_literal(self, agent, flow):
        tricky = agent.model_copy(update={"name": "Bob's \"Bot\""})
        main = export_pocketflow_runtime(tricky, [], flow).files["main.py"]
        assert "AGENT_NAME = 'Bob\\'s \"Bot\"'" in main
        compile(main, "main.py", "exec")


class TestEntryPoint:
    """The flow is rooted at the first start node, else the first node."""

    def test_start_node_wins(self, agent):
        flow = _flow([("n1", "action"), ("n2", "start")], [("n2", "n1")])
        main = export_pocketflow_runtime(agent, [], flow).files["main.py"]
        assert "flow = AsyncFlow(start=node_n2)" in main

    def test_first_node_without_start(self, agent):
        flow = _flow([("n1", "action"), ("n2", "end")], [("n1", "n2")])
        main = export_pocketflow_runtime(agent, [], flow).files["main.py"]
        assert "flow = AsyncFlow(start=node_n1)" in main


class TestFallbackGraph:
    """No flow, or an empty one, exports a start -> end graph."""

    @pytest.mark.parametrize("flow", [None, FlowData(summary="empty", nodes=[], edges=[])])
    def test_two_node_fallback(self, agent, flow):
        main = export_pocketflow_runtime(agent, [], flow).files["main.py"]
        assert CLASS_PATTERN.findall(main) == ["StartNode_start", "EndNode_end"]
        assert "    node_start >> node_end\n" in main
        assert "flow = AsyncFlow(start=node_start)" in main

    def test_fallback_ignores_agent_content(self, agent, team):
        first = export_pocketflow_runtime(agent).files["main.py"]
        second = export_pocketflow_runtime(team.agents[1]).files["main.py"]
        assert CLASS_PATTERN.findall(first) == CLASS_PATTERN.findall(second)


class TestMalformedGraphs:
    """Malformed graphs still export."""

    def test_dangling_edge_skipped(self, agent):
        flow = _flow(
            [("a", "start"), ("b", "end")],
            [("a", "b"), ("b", "missing_node")],
        )
        main = export_pocketflow_runtime(agent, [], flow).files["main.py"]
        assert "node_a >> node_b" in main
        assert "missing_node" not in main

    def test_dangling_source_skipped(self, agent):
        flow = _flow([("a", "start")], [("ghost", "a")])
        main = export_pocketflow_runtime(agent, [], flow).files["main.py"]
        assert "ghost" not in main

    def test_colliding_identifiers_are_disambiguated(self, agent):
        """Ids that sanitise to the same name get numbered suffixes."""
        flow = _flow([("a-b", "start"), ("a_b", "end")], [("a-b", "a_b")])
        main = export_pocketflow_runtime(agent, [], flow).files["main.py"]
        assert CLASS_PATTERN.findall(main) == ["StartNode_a_b", "EndNode_a_b_2"]
        assert "node_a_b >> node_a_b_2" in main

    def test_duplicate_ids_keep_first(self, agent):
        flow = _flow([("a", "start"), ("a", "end"), ("b", "end")], [("a", "b")])
        main = export_pocketflow_runtime(agent, [], flow).files["main.py"]
        assert CLASS_PATTERN.findall(main) == ["StartNode_a", "EndNode_b"]

    def test_control_characters_in_labels(self, agent):
        """NUL and line breaks in labels must not reach the generated comments."""
        flow = FlowData(
            summary="s",
            nodes=[
                FlowNode(id="a", label="bad\x00label", type="start"),
                FlowNode(id="b", label="two\nlines\r\x0b", type="end"),
            ],
            edges=[FlowEdge(id="e", source="a", target="b", label="edge\x00label", condition="x\u2028y")],
        )
        main = export_pocketflow_runtime(agent, [], flow).files["main.py"]
        assert "\x00" not in main
        assert "# Logic for bad label\n" in main
        assert "    node_a >> node_b  # edge label x y\n" in main
        compile(main, "main.py", "exec")


class TestRunExportedProject:
    """The exported project runs end to end."""

    def test_runs_to_completion(self, agent, flow, tmp_path, monkeypatch, capsys):
        bundle = export_pocketflow_runtime(agent, [], flow)
        for name, content in bundle.files.items():
            (tmp_path / name).write_text(content)

        monkeypatch.syspath_prepend(str(tmp_path))
        monkeypatch.delitem(sys.modules, "pocketflow", raising=False)
        monkeypatch.chdir(tmp_path)

        spec = importlib.util.spec_from_file_location("exported_main", tmp_path / "main.py")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        asyncio.run(module.main())
        sys.modules.pop("pocketflow", None)

        out = capsys.readouterr().out
        assert "Processing Node: Greet user" in out
        assert "Processing Node: Done" in out
        # create-ticket has no incoming edge from the path taken
        assert "Create ticket" not in out
        assert out.rstrip().endswith("Flow Complete.")

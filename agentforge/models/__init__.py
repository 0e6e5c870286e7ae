"""Configuration and flow graph models."""

from agentforge.models.agent_config import (
    AgentConfig,
    AgentStatus,
    EmbedderConfig,
    FallbackLLM,
    GlobalPrompt,
    KnowledgeConfig,
    KnowledgeSource,
    LLMConfig,
    LLMProvider,
    Tool,
    ToolParam,
    ToolType,
)
from agentforge.models.export_bundle import ExportBundle, ExportTarget
from agentforge.models.flow_graph import (
    FlowData,
    FlowEdge,
    FlowNode,
    FlowNodeType,
    FlowParseError,
)
from agentforge.models.task_config import TaskConfig, TaskGuardrail, TaskOutputFormat
from agentforge.models.team_config import (
    ManagerLLM,
    ProcessType,
    TaskCycleError,
    TeamConfig,
)

__all__ = [
    # Agents
    "AgentConfig",
    "AgentStatus",
    "EmbedderConfig",
    "FallbackLLM",
    "GlobalPrompt",
    "KnowledgeConfig",
    "KnowledgeSource",
    "LLMConfig",
    "LLMProvider",
    "Tool",
    "ToolParam",
    "ToolType",
    # Tasks and teams
    "TaskConfig",
    "TaskGuardrail",
    "TaskOutputFormat",
    "ManagerLLM",
    "ProcessType",
    "TaskCycleError",
    "TeamConfig",
    # Flow graphs
    "FlowData",
    "FlowEdge",
    "FlowNode",
    "FlowNodeType",
    "FlowParseError",
    # Export
    "ExportBundle",
    "ExportTarget",
]

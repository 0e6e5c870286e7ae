"""Team (crew) configuration: agents, tasks and an execution process."""

from enum import Enum
from typing import Any

from pydantic import Field

from agentforge.models.agent_config import AgentConfig, LLMProvider
from agentforge.models.base import CamelModel
from agentforge.models.task_config import TaskConfig


class TaskCycleError(Exception):
    """Raised when task dependencies do not form a DAG."""
    pass


class ProcessType(str, Enum):
    sequential = "sequential"
    hierarchical = "hierarchical"


class ManagerLLM(CamelModel):
    """standalone manager model used when no team agent acts as manager."""

    provider: LLMProvider
    model: str


class RuntimeTemplate(CamelModel):
    id: str
    label: str
    description: str | None = None
    type: str


class TeamRuntime(CamelModel):
    default_template: str | None = None
    templates: list[RuntimeTemplate] | None = None
    options: dict[str, Any] | None = None


class TeamConfig(CamelModel):
    """An ordered set of agents and tasks plus the process that runs them."""

    id: str
    name: str
    description: str | None = None
    process: ProcessType = ProcessType.sequential

    # hierarchical only
    manager_agent_id: str | None = None
    manager_llm: ManagerLLM | None = Field(default=None, alias="managerLLM")

    agents: list[AgentConfig] = Field(default_factory=list)
    tasks: list[TaskConfig] = Field(default_factory=list)

    runtime: TeamRuntime | None = None

    def get_agent(self, agent_id: str) -> AgentConfig | None:
        """Look up an agent by id, falling back to slug."""
        for agent in self.agents:
            if agent.id == agent_id:
                return agent
        for agent in self.agents:
            if agent.slug == agent_id:
                return agent
        return None

    @property
    def manager(self) -> AgentConfig | ManagerLLM | None:
        """the manager agent if one is referenced, else the manager LLM spec."""
        if self.manager_agent_id:
            agent = self.get_agent(self.manager_agent_id)
            if agent is not None:
                return agent
        return self.manager_llm

    def tasks_for_agent(self, agent_id: str) -> list[TaskConfig]:
        return [task for task in self.tasks if task.agent_id == agent_id]

    def task_order(self) -> list[TaskConfig]:
        """Order tasks so every task follows its ``context_tasks``.

        Ties keep list order. References to unknown task ids are ignored.

        Raises:
            TaskCycleError: if the dependencies contain a cycle.
        """
        by_id = {task.id: task for task in self.tasks}
        pending = {
            task.id: [dep for dep in (task.context_tasks or []) if dep in by_id]
            for task in self.tasks
        }

        ordered: list[TaskConfig] = []
        done: set[str] = set()
        while pending:
            ready = list(dict.fromkeys(
                task.id
                for task in self.tasks
                if task.id in pending and all(dep in done for dep in pending[task.id])
            ))
            if not ready:
                raise TaskCycleError(
                    f"Task dependencies contain a cycle: {sorted(pending)}"
                )
            for task_id in ready:
                ordered.append(by_id[task_id])
                done.add(task_id)
                del pending[task_id]
        return ordered

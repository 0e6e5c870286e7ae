"""Agent configuration models: persona, prompts, model binding, tools, knowledge.

These mirror what the builder UI edits. The exporters only read them; they
never mutate a snapshot.
"""

import re
from enum import Enum

from pydantic import Field

from agentforge.models.base import CamelModel


# matches header values such as "Bearer {{env.API_TOKEN}}"
ENV_PLACEHOLDER_PATTERN = re.compile(r"\{\{env\.(.*?)\}\}")


class LLMProvider(str, Enum):
    """Model providers the builder can bind an agent to."""

    google = "google"
    openai = "openai"
    anthropic = "anthropic"
    qwen = "qwen"
    custom = "custom"


class AgentStatus(str, Enum):
    draft = "draft"
    active = "active"
    archived = "archived"


class ToolType(str, Enum):
    """Kinds of capability a tool can wrap."""

    http = "http"
    webhook = "webhook"
    internal = "internal"
    mcp = "mcp"
    custom = "custom"
    google_search = "google_search"
    google_maps = "google_maps"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class KnowledgeSourceType(str, Enum):
    text = "text"
    url = "url"
    pdf = "pdf"
    csv = "csv"
    excel = "excel"
    json = "json"
    api = "api"


class EmbedderProvider(str, Enum):
    google = "google"
    openai = "openai"
    azure = "azure"
    ollama = "ollama"
    voyage = "voyage"
    custom = "custom"


class GlobalPrompt(CamelModel):
    """a reusable prompt snippet attached to an agent."""

    id: str
    label: str
    key: str
    content: str
    tags: list[str] | None = None
    order_index: int | None = None


class FallbackLLM(CamelModel):
    """a secondary model tried when the primary binding fails."""

    provider: str
    model: str
    api_key_env_var: str
    temperature: float | None = None
    max_tokens: int | None = None
    order_index: int | None = None


class LLMConfig(CamelModel):
    """model binding for an agent."""

    provider: LLMProvider
    model: str
    api_key_env_var: str  # name of the env var holding the key, never the key itself
    temperature: float = 0.7
    max_tokens: int = 2048
    top_k: int | None = None
    top_p: float | None = None
    fallbacks: list[FallbackLLM] | None = None


class ToolParam(CamelModel):
    name: str
    type: str
    required: bool = False
    description: str | None = None
    enum_values: list[str] | None = None
    order_index: int | None = None


class Tool(CamelModel):
    """a capability an agent can invoke."""

    id: str
    name: str
    slug: str
    type: ToolType
    description: str = ""
    enabled: bool = True

    # only meaningful for http / webhook tools
    http_method: HttpMethod | None = None
    http_url: str | None = None
    http_headers: dict[str, str] | None = None

    # JSON-schema documents kept as strings for editing
    input_schema: str | None = None
    output_schema: str | None = None

    params: list[ToolParam] | None = None

    @property
    def is_http(self) -> bool:
        return self.type in (ToolType.http, ToolType.webhook)

    def env_placeholders(self) -> list[str]:
        """Names of env vars referenced by ``{{env.NAME}}`` header values.

        Returned in first-seen order without duplicates. Non-HTTP tools
        have no headers and return an empty list.
        """
        if not self.is_http or not self.http_headers:
            return []
        names: list[str] = []
        for value in self.http_headers.values():
            for name in ENV_PLACEHOLDER_PATTERN.findall(value):
                if name and name not in names:
                    names.append(name)
        return names


class KnowledgeSource(CamelModel):
    id: str
    title: str
    type: KnowledgeSourceType
    tags: list[str] = Field(default_factory=list)
    status: str = "pending"  # "indexed", "processing", "pending"
    content: str | None = None
    shared_with_crew: bool = False  # crew level vs agent level
    file_path: str | None = None
    original_path: str | None = None
    mime_type: str | None = None
    collection_name: str | None = None


class EmbedderConfig(CamelModel):
    provider: EmbedderProvider = EmbedderProvider.google
    model: str = "text-embedding-004"
    api_key_env_var: str | None = None
    api_base: str | None = None  # azure / ollama


class KnowledgeConfig(CamelModel):
    sources: list[KnowledgeSource] = Field(default_factory=list)
    embedder: EmbedderConfig = Field(default_factory=EmbedderConfig)
    vector_provider: str | None = None
    chunk_size: int = 1000
    overlap: int = 200
    top_k_retrieval: int = 5


class AgentConfig(CamelModel):
    """A configured AI persona.

    ``slug`` is interpolated into generated file names and source code, so
    callers must keep it identifier-safe. The exporters do not re-check it.
    """

    id: str
    name: str
    slug: str
    description: str = ""

    # crew-style persona
    role: str = ""
    goal: str = ""

    language: str = "en"
    status: AgentStatus = AgentStatus.draft
    current_version: int = 1

    persona_tone: str = ""
    emoji_allowed: bool = False

    greeting: str = ""
    base_instructions: str = ""
    global_prompts: list[GlobalPrompt] = Field(default_factory=list)

    llm: LLMConfig
    tools: list[Tool] = Field(default_factory=list)
    knowledge: KnowledgeConfig = Field(default_factory=KnowledgeConfig)

    def get_tool(self, slug: str) -> Tool | None:
        for tool in self.tools:
            if tool.slug == slug:
                return tool
        return None

    def env_placeholders(self) -> list[str]:
        """Env var names referenced by all HTTP tool headers, first-seen order."""
        names: list[str] = []
        for tool in self.tools:
            for name in tool.env_placeholders():
                if name not in names:
                    names.append(name)
        return names

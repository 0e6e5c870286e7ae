"""Export an agent as a standalone Node/TypeScript HTTP service.

Usage:

    from agentforge.export import export_node_runtime
    bundle = export_node_runtime(agent, team.tasks)
    bundle.files["src/index.ts"]

Every file is rendered by its own function. Values taken from the
configuration are injected as JSON literals; everything else is fixed
boilerplate, so the same input always yields the same text.
"""

import json
import logging
from typing import Iterable

from agentforge.models.agent_config import AgentConfig, LLMProvider
from agentforge.models.export_bundle import ExportBundle, ExportTarget
from agentforge.models.task_config import TaskConfig

logger = logging.getLogger(__name__)


class UnsupportedProviderError(Exception):
    """Raised in strict mode when the agent's provider has no runtime code path."""
    pass


# the manifest lists every provider client regardless of the one in use
PACKAGE_DEPENDENCIES = {
    "express": "^4.18.2",
    "dotenv": "^16.3.1",
    "cors": "^2.8.5",
    "body-parser": "^1.20.2",
    "@google/genai": "^0.1.0",
    "openai": "^4.20.1",
    "axios": "^1.6.0",
}

PACKAGE_DEV_DEPENDENCIES = {
    "typescript": "^5.3.2",
    "@types/node": "^20.10.0",
    "@types/express": "^4.17.21",
    "@types/cors": "^2.8.17",
    "ts-node": "^10.9.1",
}

TSCONFIG = {
    "compilerOptions": {
        "target": "es2020",
        "module": "commonjs",
        "outDir": "./dist",
        "rootDir": "./src",
        "strict": True,
        "esModuleInterop": True,
        "skipLibCheck": True,
        "forceConsistentCasingInFileNames": True,
    }
}

DEFAULT_PORT = 3000


def _json(value) -> str:
    """JSON text formatted like JSON.stringify(value, null, 2)."""
    return json.dumps(value, indent=2, ensure_ascii=False)


# --- Root files ---


def render_package_json(agent: AgentConfig) -> str:
    return _json({
        "name": agent.slug,
        "version": "1.0.0",
        "description": agent.description,
        "main": "dist/index.js",
        "scripts": {
            "build": "tsc",
            "start": "node dist/index.js",
            "dev": "ts-node src/index.ts",
        },
        "dependencies": PACKAGE_DEPENDENCIES,
        "devDependencies": PACKAGE_DEV_DEPENDENCIES,
    })


def render_tsconfig() -> str:
    return _json(TSCONFIG)


def render_env_example(agent: AgentConfig) -> str:
    """Env template: port, the model key, then one line per header env var."""
    lines = [
        f"PORT={DEFAULT_PORT}",
        "# LLM Keys",
        f"{agent.llm.api_key_env_var}=your_api_key_here",
        "# Tool Keys",
    ]
    lines.extend(f"{name}=" for name in agent.env_placeholders())
    return "\n".join(lines) + "\n"


# --- src/config.ts ---

AGENT_INTERFACE = """export interface AgentConfig {
  id: string;
  name: string;
  slug: string;
  description: string;
  role: string;
  goal: string;
  language: string;
  status: string;
  currentVersion: number;
  personaTone: string;
  emojiAllowed: boolean;
  greeting: string;
  baseInstructions: string;
  globalPrompts: any[];
  llm: {
    provider: string;
    model: string;
    apiKeyEnvVar: string;
    temperature: number;
    maxTokens: number;
    topK?: number;
    topP?: number;
    fallbacks?: any[];
  };
  tools: any[];
  knowledge: any;
  tasks: any[];
}
"""


def render_config_module(agent: AgentConfig, tasks: Iterable[TaskConfig]) -> str:
    """Agent shape plus the agent's configuration merged with its tasks."""
    config = agent.to_wire()
    config["tasks"] = [task.to_wire() for task in tasks]
    return (
        AGENT_INTERFACE
        + "\n"
        + f"export const agentConfig: AgentConfig = {_json(config)};\n"
    )


# --- src/llm.ts ---

LLM_HEADER = """import { GoogleGenAI } from "@google/genai";
import OpenAI from "openai";
import dotenv from "dotenv";
import { agentConfig } from "./config";

dotenv.config();

export interface ChatMessage {
  role: string;
  content: string;
}

export class ProviderNotSupportedError extends Error {
  constructor(provider: string) {
    super(`Provider not supported in this runtime export yet: ${provider}`);
    this.name = "ProviderNotSupportedError";
  }
}

function requireApiKey(): string {
  const apiKey = process.env[agentConfig.llm.apiKeyEnvVar];
  if (!apiKey) throw new Error(`Missing API Key: ${agentConfig.llm.apiKeyEnvVar}`);
  return apiKey;
}

export async function generateResponse(messages: ChatMessage[]): Promise<string> {
  const provider: string = agentConfig.llm.provider;
"""

# single-turn: only the last message is sent; earlier turns are dropped
GOOGLE_BRANCH = """
  if (provider === "google") {
    const apiKey = requireApiKey();
    const ai = new GoogleGenAI({ apiKey });
    const lastMessage = messages[messages.length - 1].content;

    const response = await ai.models.generateContent({
      model: agentConfig.llm.model,
      contents: lastMessage,
      config: {
        systemInstruction: agentConfig.baseInstructions,
        temperature: agentConfig.llm.temperature,
        maxOutputTokens: agentConfig.llm.maxTokens,
      },
    });
    return response.text ?? "";
  }
"""

OPENAI_BRANCH = """
  if (provider === "openai") {
    const apiKey = requireApiKey();
    const openai = new OpenAI({ apiKey });
    const systemMessage = { role: "system", content: agentConfig.baseInstructions };

    const response = await openai.chat.completions.create({
      model: agentConfig.llm.model,
      messages: [systemMessage, ...messages] as any,
      temperature: agentConfig.llm.temperature,
      max_tokens: agentConfig.llm.maxTokens,
    });
    return response.choices[0].message.content ?? "";
  }
"""

LLM_FOOTER = """
  throw new ProviderNotSupportedError(provider);
}
"""

# one generated code path per provider; anything missing here only throws
PROVIDER_BRANCHES: dict[LLMProvider, str] = {
    LLMProvider.google: GOOGLE_BRANCH,
    LLMProvider.openai: OPENAI_BRANCH,
}


def render_llm_module(agent: AgentConfig, strict: bool = False) -> str:
    """Model invocation module for the agent's provider.

    Only the branch for the configured provider is emitted. Providers
    without a branch produce a module whose sole path raises
    ``ProviderNotSupportedError`` at runtime, or, with ``strict``, fail
    here with :class:`UnsupportedProviderError`.
    """
    provider = agent.llm.provider
    branch = PROVIDER_BRANCHES.get(provider)
    if branch is None:
        if strict:
            raise UnsupportedProviderError(
                f"Provider '{provider.value}' has no Node runtime code path"
            )
        logger.warning(
            "agent %s uses provider %s, exported runtime will reject every chat request",
            agent.slug,
            provider.value,
        )
        branch = ""
    return LLM_HEADER + branch + LLM_FOOTER


# --- src/tools.ts ---

TOOLS_MODULE = r"""import axios from "axios";
import { agentConfig } from "./config";

const ENV_PLACEHOLDER = /\{\{env\.(.*?)\}\}/g;

// returns undefined when any referenced env var is missing
function resolveHeaderValue(value: string): string | undefined {
  let missing = false;
  const resolved = value.replace(ENV_PLACEHOLDER, (_match: string, name: string) => {
    const envValue = process.env[name];
    if (!envValue) {
      missing = true;
      return "";
    }
    return envValue;
  });
  return missing ? undefined : resolved;
}

export function buildHeaders(rawHeaders?: Record<string, string>): Record<string, string> {
  const headers: Record<string, string> = {};
  for (const [key, value] of Object.entries(rawHeaders ?? {})) {
    const resolved = resolveHeaderValue(String(value));
    if (resolved !== undefined) {
      headers[key] = resolved;
    }
  }
  return headers;
}

export async function executeTool(slug: string, params: any) {
  const tool = agentConfig.tools.find((t: any) => t.slug === slug);
  if (!tool) throw new Error(`Tool ${slug} not found`);

  if (tool.type === "http" || tool.type === "webhook") {
    console.log(`Executing HTTP Tool: ${tool.name}`);

    try {
      const response = await axios({
        method: tool.httpMethod || "POST",
        url: tool.httpUrl,
        headers: buildHeaders(tool.httpHeaders),
        data: params,
      });
      return response.data;
    } catch (error: any) {
      console.error("Tool execution failed", error.message);
      return { error: error.message };
    }
  }

  return { error: "Tool type not implemented" };
}
"""


# --- src/index.ts ---

INDEX_MODULE = r"""import express from "express";
import cors from "cors";
import dotenv from "dotenv";
import { agentConfig } from "./config";
import { generateResponse } from "./llm";
import { executeTool } from "./tools";

dotenv.config();

const app = express();
app.use(cors());
app.use(express.json());

const PORT = process.env.PORT || 3000;

app.get("/", (req, res) => {
  res.json({
    status: "running",
    agent: agentConfig.name,
    version: agentConfig.currentVersion,
  });
});

// returns raw model text; tool calls in the reply are not executed
app.post("/chat", async (req, res) => {
  try {
    const { messages } = req.body;

    if (!messages || !Array.isArray(messages)) {
      return res.status(400).json({ error: "Messages array is required" });
    }

    console.log(`Received message for agent: ${agentConfig.name}`);

    const responseText = await generateResponse(messages);

    res.json({
      response: responseText,
      agent: agentConfig.name,
    });
  } catch (error: any) {
    console.error("Error processing request:", error);
    res.status(500).json({ error: error.message });
  }
});

app.post("/tool/:slug", async (req, res) => {
  const { slug } = req.params;

  try {
    const result = await executeTool(slug, req.body);
    res.json(result);
  } catch (error: any) {
    res.status(500).json({ error: error.message });
  }
});

app.listen(PORT, () => {
  console.log(`\nAgent "${agentConfig.name}" is running!`);
  console.log(`Local: http://localhost:${PORT}`);
  console.log(`Slug: ${agentConfig.slug}`);
});
"""


# --- README.md ---


def render_readme(agent: AgentConfig, tasks: list[TaskConfig]) -> str:
    return f"""# {agent.name}

{agent.description}

## Setup

1. Install dependencies:
   ```bash
   npm install
   ```

2. Configure Environment:
   Copy `.env.example` to `.env` and fill in your API keys (e.g., `{agent.llm.api_key_env_var}`).

3. Run:
   ```bash
   npm run dev
   ```

## API

- **GET /**: Health check with agent name and version.
- **POST /chat**: Send `{{"messages": [{{"role": "user", "content": "..."}}]}}` to the agent.
- **POST /tool/:slug**: Execute a specific tool directly.

## Configuration
This agent is powered by **{agent.llm.provider.value}** ({agent.llm.model}).
Configuration is stored in `src/config.ts`.

## Tools
This agent has **{len(agent.tools)}** configured tools.

## Tasks
This agent has **{len(tasks)}** defined tasks available for execution.
"""


def export_node_runtime(
    agent: AgentConfig,
    tasks: Iterable[TaskConfig] = (),
    strict: bool = False,
) -> ExportBundle:
    """Compile an agent and its tasks into a Node HTTP service project.

    Args:
        agent: the agent snapshot to export; read only
        tasks: tasks serialized into the config module under ``tasks``
        strict: fail at export time instead of at runtime for providers
            the service cannot call

    Returns:
        An ExportBundle with a fixed set of eight files.
    """
    tasks = list(tasks)
    bundle = ExportBundle(target=ExportTarget.node, agent_slug=agent.slug)

    bundle.add("package.json", render_package_json(agent))
    bundle.add("tsconfig.json", render_tsconfig())
    bundle.add(".env.example", render_env_example(agent))
    bundle.add("src/config.ts", render_config_module(agent, tasks))
    bundle.add("src/llm.ts", render_llm_module(agent, strict=strict))
    bundle.add("src/tools.ts", TOOLS_MODULE)
    bundle.add("src/index.ts", INDEX_MODULE)
    bundle.add("README.md", render_readme(agent, tasks))

    logger.debug("exported %s with %d files", bundle.name, len(bundle.files))
    return bundle

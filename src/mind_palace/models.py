"""LLM 模型配置 — 所有模型名称的唯一来源。"""

# Gemini：房间生成（默认 provider）
MODEL_GEMINI = "gemini-3-flash-preview"

# OpenAI：房间生成（备选 provider）
MODEL_OPENAI = "gpt-5-mini"

PROVIDERS = ("gemini", "openai")
DEFAULT_PROVIDER = "gemini"

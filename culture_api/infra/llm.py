from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from .config import AppConfig


def get_chat_model(cfg: AppConfig) -> BaseChatModel:
    # temperature 0 保证输出稳定；不重试，上游失败直接返回 502
    kwargs = {
        "api_key": cfg.openai_api_key,
        "temperature": 0.0,
        "model": cfg.openai_model,
        "max_retries": 0,
    }
    if cfg.openai_api_base:
        kwargs["base_url"] = cfg.openai_api_base
    return ChatOpenAI(**kwargs)

"""Ark bot response types carried in message extras."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _ArkModel(BaseModel):
    # Unknown fields from newer API versions are kept, not dropped
    model_config = ConfigDict(extra="allow", protected_namespaces=())


class ArkRequestID(str):
    """Request id stored in message extras; a distinct type so stream chunks merge by last-wins."""


class BotModelUsage(_ArkModel):
    name: Optional[str] = None
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class BotActionUsage(_ArkModel):
    name: Optional[str] = None
    count: Optional[int] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    action_name: Optional[str] = None


class BotUsage(_ArkModel):
    model_usage: List[BotModelUsage] = Field(default_factory=list)
    action_usage: List[BotActionUsage] = Field(default_factory=list)


class BotCoverImage(_ArkModel):
    url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class BotChatResultReference(_ArkModel):
    url: Optional[str] = None
    logo_url: Optional[str] = None
    mobile_url: Optional[str] = None
    site_name: Optional[str] = None
    title: Optional[str] = None
    cover_image: Optional[BotCoverImage] = None
    summary: Optional[str] = None
    publish_time: Optional[str] = None
    collection_name: Optional[str] = None
    project: Optional[str] = None
    doc_id: Optional[str] = None
    doc_name: Optional[str] = None
    doc_type: Optional[str] = None
    doc_title: Optional[str] = None
    chunk_id: Optional[str] = None
    chunk_title: Optional[str] = None
    page_nums: Optional[str] = None
    origin_text_token_len: Optional[int] = None
    create_time: Optional[int] = None
    update_time: Optional[int] = None


class BotChatResultReferences(list):
    """Reference list stored in message extras; merged across chunks by flattening."""

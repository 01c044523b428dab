from llmproxy.core.message_processor import (
    DEFAULT_SYSTEM_PROMPT,
    build_chat_messages,
    build_text_prompt,
    build_upstream_payload,
    message_text,
    normalize_role,
)
from llmproxy.core.providers import GROQ, HUGGINGFACE_LEGACY
from llmproxy.models.schemas import ChatMessage, ChatRequest


def _messages(*pairs):
    return [ChatMessage(role=role, content=content) for role, content in pairs]


def test_normalize_role():
    assert normalize_role("system") == "system"
    assert normalize_role("user") == "user"
    assert normalize_role("assistant") == "assistant"
    assert normalize_role("bot") == "assistant"
    assert normalize_role("") == "assistant"


def test_message_text_flattens_content_parts():
    content = [
        {"type": "text", "text": "第一段"},
        {"type": "image_url", "image_url": {"url": "https://example.com/a.png"}},
        {"type": "text", "text": "第二段"},
    ]
    assert message_text(content) == "第一段\n第二段"
    assert message_text(None) == ""
    assert message_text(3) == "3"


def test_text_prompt_uses_role_labels_and_open_assistant_turn():
    prompt = build_text_prompt(_messages(("user", "你好"), ("assistant", "嗨"), ("user", "在吗")))
    assert prompt == (
        f"{DEFAULT_SYSTEM_PROMPT}\n\n"
        "用户: 你好\n"
        "助手: 嗨\n"
        "用户: 在吗\n"
        "助手:"
    )


def test_text_prompt_with_system_prompt_and_system_message():
    prompt = build_text_prompt(_messages(("system", "规则"), ("user", "hi")), "你是猫")
    assert prompt == "你是猫\n\n系统: 规则\n用户: hi\n助手:"


def test_chat_messages_prepend_default_persona():
    result = build_chat_messages(_messages(("user", "hi")))
    assert result == [
        {"role": "system", "content": DEFAULT_SYSTEM_PROMPT},
        {"role": "user", "content": "hi"},
    ]


def test_chat_messages_prepend_caller_system_prompt():
    result = build_chat_messages(_messages(("user", "hi")), "be brief")
    assert result[0] == {"role": "system", "content": "be brief"}
    assert [m["role"] for m in result].count("system") == 1


def test_chat_messages_keep_existing_leading_system_message():
    result = build_chat_messages(_messages(("system", "from caller"), ("user", "hi")))
    assert result == [
        {"role": "system", "content": "from caller"},
        {"role": "user", "content": "hi"},
    ]


def test_system_prompt_overrides_existing_leading_system_message():
    result = build_chat_messages(_messages(("system", "from caller"), ("user", "hi")), "override")
    assert result == [
        {"role": "system", "content": "override"},
        {"role": "user", "content": "hi"},
    ]


def test_chat_messages_normalize_unknown_roles():
    result = build_chat_messages(_messages(("user", "hi"), ("model", "hello")))
    assert result[-1] == {"role": "assistant", "content": "hello"}


def test_chat_payload():
    req = ChatRequest(messages=_messages(("user", "hi")), systemPrompt="")
    payload = build_upstream_payload(GROQ, "llama-3.1-8b-instant", req)
    assert payload == {
        "model": "llama-3.1-8b-instant",
        "messages": [
            {"role": "system", "content": DEFAULT_SYSTEM_PROMPT},
            {"role": "user", "content": "hi"},
        ],
        "max_tokens": 200,
        "temperature": 0.7,
    }


def test_text_generation_payload():
    req = ChatRequest(messages=_messages(("user", "hi")))
    payload = build_upstream_payload(HUGGINGFACE_LEGACY, "some/model", req)
    assert "model" not in payload
    assert payload["inputs"].endswith("用户: hi\n助手:")
    assert payload["parameters"] == {
        "max_new_tokens": 200,
        "temperature": 0.7,
        "return_full_text": False,
    }


def test_non_string_roles_normalize_to_assistant():
    assert normalize_role(None) == "assistant"
    assert normalize_role(1) == "assistant"


def test_chat_messages_keep_content_part_lists():
    parts = [
        {"type": "text", "text": "看这张图"},
        {"type": "image_url", "image_url": {"url": "https://example.com/cat.png"}},
    ]
    result = build_chat_messages(_messages(("user", parts)))
    assert result[1] == {"role": "user", "content": parts}


def test_chat_messages_stringify_other_content():
    result = build_chat_messages(_messages(("user", None), ("user", 3)))
    assert [m["content"] for m in result[1:]] == ["", "3"]


def test_text_prompt_flattens_content_parts():
    parts = [{"type": "text", "text": "看这张图"}, {"type": "image_url", "image_url": {"url": "x"}}]
    prompt = build_text_prompt(_messages(("user", parts)))
    assert prompt.endswith("用户: 看这张图\n助手:")

import pytest

from conftest import RecordingHandle
from reverie.libs.ml import BackendKind, ConfigNotFound, RemoteInferenceError
from reverie.libs.ml.backends import OnDeviceBackend, RemoteChatBackend
from reverie.libs.ml.backends.on_device import generation_options


@pytest.mark.asyncio
async def test_on_device_applies_generation_options(dispatcher, factory) -> None:
    handle = RecordingHandle([{"generated_text": "  a quiet morning  "}])
    factory.handles["writer-local"] = handle

    backend = await dispatcher.resolve("writer-local")
    output = await backend.invoke("Write about mornings")

    assert isinstance(backend, OnDeviceBackend)
    assert output == "a quiet morning"
    assert handle.calls == [
        (
            "Write about mornings",
            {"max_new_tokens": 64, "temperature": 0.5, "do_sample": True, "return_full_text": False},
        )
    ]


@pytest.mark.asyncio
async def test_remote_builds_system_and_user_messages(dispatcher, chat_client) -> None:
    chat_client.reply = "Hello there"

    backend = await dispatcher.resolve("remote-chat")
    output = await backend.invoke("hi")

    assert isinstance(backend, RemoteChatBackend)
    assert output == "Hello there"
    request = chat_client.requests[0]
    assert request["model"] == "mistral:latest"
    assert request["messages"] == [
        {"role": "system", "content": "Be kind."},
        {"role": "user", "content": "hi"},
    ]
    assert request["options"] == {"temperature": 0.7, "num_predict": 500}


@pytest.mark.asyncio
async def test_remote_uses_override_and_skips_empty_system(dispatcher, chat_client, system_prompts) -> None:
    system_prompts.set_system_prompt("remote-chat", "Override")
    await (await dispatcher.resolve("remote-chat")).invoke("one")

    system_prompts.set_system_prompt("remote-chat", "")
    await (await dispatcher.resolve("remote-chat")).invoke("two")

    assert chat_client.requests[0]["messages"][0] == {"role": "system", "content": "Override"}
    assert chat_client.requests[1]["messages"] == [{"role": "user", "content": "two"}]


@pytest.mark.asyncio
async def test_explicit_backend_kind_overrides_registry(dispatcher, chat_client, factory) -> None:
    backend = await dispatcher.resolve("writer-local", BackendKind.REMOTE_CHAT)
    await backend.invoke("hi")

    assert isinstance(backend, RemoteChatBackend)
    assert chat_client.requests[0]["model"] == "test/gpt"
    assert factory.builds == []


@pytest.mark.asyncio
async def test_unknown_model_raises(dispatcher) -> None:
    with pytest.raises(ConfigNotFound):
        await dispatcher.resolve("nonexistent")


@pytest.mark.asyncio
async def test_remote_errors_propagate_without_retry(dispatcher, chat_client) -> None:
    chat_client.error = RemoteInferenceError("connection refused")
    backend = await dispatcher.resolve("remote-chat")

    with pytest.raises(RemoteInferenceError):
        await backend.invoke("hi")
    assert len(chat_client.requests) == 1


def test_generation_options_only_trim_prompt_for_text_generation(registry) -> None:
    assert "return_full_text" not in generation_options(registry.lookup_model("remote-summary"))
    assert generation_options(registry.lookup_model("remote-chat"))["return_full_text"] is False

"""Minimal demonstration of the message pipeline against a local capability daemon."""

import asyncio

from lingua_core.api import service

if __name__ == "__main__":
    async def main() -> None:
        text = (
            "Transformer models process tokens in parallel using self-attention, which lets every "
            "position attend to every other position and makes long-range dependencies cheap to learn."
        )
        created = await service.submit_message(text)
        print("Message:", created)
        service.request_summary(created["id"])
        service.request_translation(created["id"], "fr")
        await service.get_default_controller().join()
        print("Annotated:", service.list_messages())
        print("Error:", service.current_error())

    asyncio.run(main())

"""Upload a local video, wait for processing, then run one analysis mode on it."""

from __future__ import annotations

import argparse
import asyncio
import logging

from media_bridge import (
    DEFAULT_MODES,
    AnalysisSession,
    Asset,
    MediaBridgeError,
    PromptInput,
    Provider,
    Settings,
    create_service,
)

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


async def analyze(path: str, mode: str, prompt: str | None, sub_mode: str | None) -> None:
    settings = Settings.from_env()
    user_input = PromptInput(custom_text=prompt or "")
    if sub_mode:
        user_input.select(sub_mode)
    elif prompt:
        user_input.focus_custom()

    async with create_service(Provider.GEMINI, settings.model) as service:
        session = AnalysisSession(service, settings=settings)
        try:
            await session.load_asset(Asset.from_path(path))
            results = await session.analyze(mode, user_input)
        except MediaBridgeError as exc:
            logger.error("Pipeline %s: %s", session.state, exc)
            return

    if results is None:
        logger.warning("Model returned no tool call; nothing to show")
        return
    for item in results:
        extras = []
        if item.objects:
            extras.append(", ".join(item.objects))
        if item.value is not None:
            extras.append(str(item.value))
        logger.info("%s  %s  %s", item.time, item.text or "", " | ".join(extras))


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("video", help="Path to a local video file")
    parser.add_argument("--mode", choices=list(DEFAULT_MODES), default="Key moments")
    parser.add_argument("--prompt", help="Custom instructions (Custom and Chart modes)")
    parser.add_argument("--sub-mode", help="Chart preset, e.g. Excitement")
    args = parser.parse_args()

    asyncio.run(analyze(args.video, args.mode, args.prompt, args.sub_mode))

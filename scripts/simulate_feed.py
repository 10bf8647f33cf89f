#!/usr/bin/env python
"""Simulated feed session against a real content provider.

This script scrolls through a feed with scripted dwell times and prints
how the behavioral metrics, the recommendation and the buffer evolve.

Usage:
    python scripts/simulate_feed.py [--profile profile.json]

Prerequisites:
    .env file with a provider API key configured

Environment variables (via .env):
    IBLM_LLM_PROVIDER=openai
    IBLM_LLM_API_KEY=your_api_key
    IBLM_LLM_MODEL=gpt-4o-mini
    IBLM_REDIS_URL=redis://localhost:6379   (optional)
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from iblm.config import IBLMConfig
from iblm.infra.llm import get_provider_class
from iblm.logging import configure_logging, get_logger
from iblm.models.content import ChildProfile
from iblm.session import IBLMSession

configure_logging(level=logging.INFO)
logger = get_logger(__name__)

# (dwell seconds, frustration signal) per card: a restless start, then a
# child who settles into the topic
SCRIPT: list[tuple[float, int]] = [
    (1.0, 0),
    (1.5, 2),
    (1.0, 3),
    (6.0, 0),
    (11.0, 0),
    (12.0, 0),
]


def print_state(session: IBLMSession) -> None:
    metrics = session.metrics
    recommendation = session.decide_next_content()
    print(
        f"  attention={metrics.attention_span:.0f}ms energy={metrics.energy_level} "
        f"frustration={metrics.frustration_level} stickiness={metrics.topic_stickiness}"
    )
    print(
        f"  next: {recommendation.difficulty}/{recommendation.format}/"
        f"{recommendation.topic_category} ({recommendation.reason})"
    )
    statuses = " ".join(item.hydration_status[0] for item in session.items)
    print(f"  buffer[{len(session.items)}]: {statuses}")


async def main(profile_path: Path | None) -> None:
    config = IBLMConfig()
    profile = (
        ChildProfile.model_validate_json(profile_path.read_text(encoding="utf-8"))
        if profile_path
        else ChildProfile()
    )
    generator_class = get_provider_class(config.llm.provider)

    print("=" * 60)
    print(f"Provider: {config.llm.provider} (model: {config.llm.model})")
    print("=" * 60)

    async with IBLMSession(generator_class, profile=profile, config=config) as session:
        await session.load_initial_track()
        await session.wait_idle()
        print("\nInitial track:")
        print_state(session)

        for index, (dwell, frustration) in enumerate(SCRIPT, start=1):
            await asyncio.sleep(dwell)
            if frustration:
                session.report_frustration(frustration)
            session.on_visible_index_changed(index)
            await session.wait_idle()

            item = session.items[index] if index < len(session.items) else None
            print(f"\nCard {index}: {item.title if item else '(none)'}")
            print_state(session)

    print("\nSession closed.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--profile", type=Path, default=None, help="Child profile JSON")
    args = parser.parse_args()
    asyncio.run(main(args.profile))

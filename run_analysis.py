"""
Analyze a local media file from the command line.

    python run_analysis.py clip.mp4 --media-type VIDEO --caption "New drop" --output result.json
"""

import argparse
import asyncio
import os
import sys

import aiofiles
from loguru import logger

from metacoach.analysis_pipeline import AnalysisOrchestrator, MediaRecord, MediaType
from metacoach.config.settings import MetaCoachConfig
from metacoach.exceptions import MetaCoachException
from metacoach.utils.logging_config import log_manager


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Score an Instagram post's hook, thumbnail and content quality")
    parser.add_argument("input_path", help="Path to the media file")
    parser.add_argument(
        "--media-type",
        choices=[t.value for t in MediaType],
        default=MediaType.VIDEO.value,
        help="Post type (default: VIDEO)",
    )
    parser.add_argument("--caption", default=None, help="Post caption")
    parser.add_argument("--media-id", default=None, help="Media id (default: file name)")
    parser.add_argument("-o", "--output", default=None, help="Write the JSON result here instead of stdout")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)
    config = MetaCoachConfig()
    log_manager.configure(config.logging)

    async with aiofiles.open(args.input_path, mode="rb") as f:
        media_bytes = await f.read()

    media = MediaRecord(
        id=args.media_id or os.path.basename(args.input_path),
        media_type=MediaType(args.media_type),
        caption=args.caption,
    )

    orchestrator = AnalysisOrchestrator.from_config(config, disable_console_log=True)
    try:
        result = await orchestrator.analyze(media_bytes, media)
    except MetaCoachException as e:
        logger.error(f"Analysis failed [{e.error_code}]: {e}")
        return 1
    finally:
        await orchestrator.close()

    output = result.model_dump_json(indent=2)
    if args.output:
        async with aiofiles.open(args.output, mode="w") as f:
            await f.write(output)
        logger.info(f"Wrote analysis to {args.output}")
    else:
        print(output)

    logger.info(f"Processing time: {result.processing_time_ms}ms")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

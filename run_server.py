#!/usr/bin/env python3
"""
Voice agent server launcher
Runs the FastAPI agent API (/agent/run, /agent/tools, /health) under uvicorn
"""
import asyncio
import logging
import sys

import uvicorn

from voice_agent.config import settings

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def main():
    logger.info("Starting voice agent server...")
    logger.info(f"Python {sys.version}, encoding={sys.getdefaultencoding()}")
    logger.info(f"Health check: {settings.agent_url}/health")
    logger.info(f"Available tools: {settings.agent_url}/agent/tools")
    logger.info(f"Agent endpoint: POST {settings.agent_url}/agent/run")

    config = uvicorn.Config(
        "voice_agent.api:app",
        host=settings.agent_host,
        port=settings.agent_port,
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)
    await server.serve()


if __name__ == "__main__":
    asyncio.run(main())

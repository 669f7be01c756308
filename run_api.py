#!/usr/bin/env python3
"""
Progress Tracker API Server Entry Point

Architecture:
┌──────────────────────────────────────────────────────────────┐
│                      API Layer (FastAPI)                      │
│  /api/work-entries     /api/bugs          /api/reports        │
└──────────┬──────────────────┬────────────────────┬───────────┘
           │                  │                    │
     ┌─────▼──────┐   ┌───────▼────────┐   ┌───────▼────────┐
     │ AIProvider │   │ Similarity     │   │ Report / Audio │
     │ (Mistral / │◄──│ Search (RAG)   │   │ / PDF export   │
     │  OpenAI)   │   └────────────────┘   └────────────────┘
     └─────┬──────┘
           │
     ┌─────▼──────┐
     │  MongoDB   │
     └────────────┘

Run with: python run_api.py
"""

import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import uvicorn

from config import Config

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger("ProgressTracker")


def print_banner():
    """Print startup banner."""
    banner = """
╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║                 PROGRESS TRACKER API                          ║
║       Work entries · Bug knowledge base · AI reports          ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝
    """
    print(banner)


def main():
    """Start the FastAPI server."""
    print_banner()

    try:
        Config.validate()
    except ValueError as e:
        logger.error(str(e))
        return 1

    print("🚀 Starting Progress Tracker Server...")
    print(f"   Host:     {Config.API_HOST}")
    print(f"   Port:     {Config.API_PORT}")
    print(f"   Reload:   {Config.API_RELOAD}")
    print(f"   Provider: {Config.AI_PROVIDER}")
    print()
    print("📡 Endpoints:")
    print(f"   API Documentation: http://{Config.API_HOST}:{Config.API_PORT}/docs")
    print(f"   Health Check:      http://{Config.API_HOST}:{Config.API_PORT}/health")
    print(f"   Similar Bugs:      POST http://{Config.API_HOST}:{Config.API_PORT}/api/bugs/search-solution")
    print(f"   Generate Report:   POST http://{Config.API_HOST}:{Config.API_PORT}/api/reports/generate")
    print()
    print("=" * 60)

    uvicorn.run(
        "api.main:app",
        host=Config.API_HOST,
        port=Config.API_PORT,
        reload=Config.API_RELOAD,
        log_level="info",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

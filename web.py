# -*- coding: utf-8 -*-
# @file web.py
# @brief Entry point for the server-rendered web client
# @author sailing-innocent
# @date 2025-04-21

import argparse
from pathlib import Path

from dotenv import load_dotenv

parser = argparse.ArgumentParser()
parser.add_argument("--mode", type=str, default="dev", help="Mode: dev, debug, prod")
parser.add_argument("--port", type=int, default=3000, help="Port to listen on")
args, unknown = parser.parse_known_args()

env_path = Path(__file__).parent / f".env.{args.mode}"
if env_path.exists():
    print(f"Loading environment variables from {env_path.name}")
    load_dotenv(env_path, encoding="utf-8")
elif (Path(__file__).parent / ".env").exists():
    print("Loading environment variables from .env (default)")
    load_dotenv(Path(__file__).parent / ".env", encoding="utf-8")

# NOW import web modules (after env vars are loaded)
import uvicorn

from bha_web import config
from bha_web.app import create_app

app = create_app()


if __name__ == "__main__":
    print(f"Starting BHA web client in {args.mode} mode, proxying to {config.backend_url()}")
    uvicorn.run(
        "web:app",
        host="0.0.0.0",
        port=args.port,
        reload=args.mode != "prod",
    )

# -*- coding: utf-8 -*-
# @file main.py
# @brief FastAPI application entry point for the archive API
# @author sailing-innocent
# @date 2025-04-21

import os
import sys
from pathlib import Path

# Load environment variables FIRST, before any other imports
from dotenv import load_dotenv
import argparse

# Parse arguments to determine which env file to load
parser = argparse.ArgumentParser()
parser.add_argument("--mode", type=str, default="dev", help="Mode: dev, debug, prod")
parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
args, unknown = parser.parse_known_args()

# Determine env file based on mode
if args.mode == "dev":
    env_file = ".env.dev"
elif args.mode == "debug":
    env_file = ".env.debug"
elif args.mode == "prod":
    env_file = ".env.prod"
else:
    env_file = ".env"

# Load environment variables before importing any server modules
env_path = Path(__file__).parent / env_file
if env_path.exists():
    print(f"Loading environment variables from {env_file}")
    load_dotenv(env_path, encoding="utf-8")
else:
    default_env = Path(__file__).parent / ".env"
    if default_env.exists():
        print("Loading environment variables from .env (default)")
        load_dotenv(default_env, encoding="utf-8")
    else:
        print(f"Warning: No environment file found ({env_file} or .env)")
        print("Falling back to a local sqlite database and development secrets")

if args.mode == "prod" and not os.environ.get("JWT_SECRET"):
    print("ERROR: JWT_SECRET environment variable is not set!")
    print("Please set it in your .env.prod file")
    sys.exit(1)

# NOW import server modules (after env vars are loaded)
import uvicorn

from bha_server import config
from bha_server.app import create_app
from bha_server.db import Database

Database.get_instance()
app = create_app()


if __name__ == "__main__":
    print(f"Starting BHA Archive API in {args.mode} mode...")
    print(f"Database URI: {config.database_uri().split('@')[-1][:50]}...")
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=args.port,
        reload=args.mode != "prod",
    )

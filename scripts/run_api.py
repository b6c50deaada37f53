#!/usr/bin/env python3
"""
Dr.Bayes — Запуск API сервера

Запуск:
    python scripts/run_api.py
    python scripts/run_api.py --port 8080
    python scripts/run_api.py --host 127.0.0.1 --port 8000

Пороги рушія задаються через DRBAYES_CONFIG (YAML) або
DRBAYES_TEST_THRESHOLD / DRBAYES_TREATMENT_THRESHOLD / DRBAYES_ELIMINATION_FLOOR.
"""

import argparse

import uvicorn

from dr_bayes.api.config import APIConfig


def main():
    defaults = APIConfig.from_env()

    parser = argparse.ArgumentParser(description='Dr.Bayes API Server')
    parser.add_argument('--host', default=defaults.host, help=f'Host (default: {defaults.host})')
    parser.add_argument('--port', type=int, default=defaults.port, help=f'Port (default: {defaults.port})')
    parser.add_argument('--reload', action='store_true', help='Enable auto-reload')
    parser.add_argument('--workers', type=int, default=1, help='Number of workers')

    args = parser.parse_args()

    print("=" * 60)
    print("Dr.Bayes — API Server")
    print("=" * 60)
    print(f"   Host: {args.host}")
    print(f"   Port: {args.port}")
    print(f"   Reload: {args.reload}")
    print("=" * 60)

    # Сховище живе в пам'яті процесу: кілька workers = кілька незалежних сховищ
    uvicorn.run(
        "dr_bayes.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=args.workers if not args.reload else 1,
        log_level=defaults.log_level.lower(),
    )


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Dr.Triage — Запуск API сервера

Запуск:
    python scripts/run_api.py
    python scripts/run_api.py --port 8080 --reload

Сесії інтерв'ю зберігаються в пам'яті процесу, тому сервер працює
з одним worker-ом.
"""

import sys
import argparse
from pathlib import Path

import uvicorn

# Додаємо корінь проекту до path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dr_triage.api.config import config
from dr_triage.config import RemoteBackendConfig


def main():
    parser = argparse.ArgumentParser(description='Dr.Triage API Server')
    parser.add_argument('--host', default=config.host, help=f'Host (default: {config.host})')
    parser.add_argument('--port', type=int, default=config.port, help=f'Port (default: {config.port})')
    parser.add_argument('--reload', action='store_true', default=config.reload, help='Auto-reload')

    args = parser.parse_args()
    remote = RemoteBackendConfig.from_env()

    print("=" * 60)
    print("🏥 Dr.Triage — API Server")
    print("=" * 60)
    print(f"   Address: http://{args.host}:{args.port}{config.api_prefix}")
    print(f"   Backend: {'remote ' + remote.base_url if remote.is_configured else 'local fallback'}")
    print(f"   Sessions: max {config.max_sessions}, timeout {config.session_timeout_minutes} min")
    print("=" * 60)

    uvicorn.run(
        "dr_triage.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()

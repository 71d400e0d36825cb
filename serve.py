#!/usr/bin/env python3
# serve.py
"""
Business API 서버 (CLI 엔트리포인트)

사전 조건:
  PostgreSQL + Elasticsearch (또는 DATABASE_URL=sqlite+aiosqlite:///./business.db)

실행:
  python serve.py
  python serve.py --port 8080
  APP_ENV=prd DATABASE_URL=postgresql+asyncpg://... python serve.py

설정은 환경 변수 / .env 에서 읽는다 (business_api.settings.AppSettings).
"""

import argparse

import uvicorn

from business_api import AppSettings, create_app
from pipeline_commons import setup_logging


def main():
    settings = AppSettings()

    parser = argparse.ArgumentParser(description="Business CRUD / bulk ingestion / search API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--log_level", default=settings.log_level)
    args = parser.parse_args()

    setup_logging(log_file=settings.log_file, level=args.log_level)

    app = create_app(settings)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()

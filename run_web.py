#!/usr/bin/env python
"""
启动 Culture Date API 服务脚本
OPENAI_API_KEY 未配置时直接退出
"""

import os
import sys
import argparse
import logging
import uvicorn
from pydantic import ValidationError

# 添加项目根目录到路径
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from culture_api.api.server import create_app
from culture_api.infra.config import get_config
from culture_api.observability.logging_utils import init_logging

logger = logging.getLogger("culture_api.run_web")


def main():
    """主函数"""
    parser = argparse.ArgumentParser(
        description="启动 Culture Date API (FastAPI)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
    python run_web.py                    # 使用 PORT 环境变量，默认 80
    python run_web.py --port 8080        # 使用 8080 端口
        """
    )

    parser.add_argument(
        '--host',
        type=str,
        default='0.0.0.0',
        help='服务器主机地址 (默认: 0.0.0.0)'
    )

    parser.add_argument(
        '--port',
        type=int,
        default=None,
        help='服务器端口 (默认: PORT 环境变量或 80)'
    )

    args = parser.parse_args()

    # 读取配置前先输出到 stderr；create_app 会按 LOG_PATH 切换
    init_logging()

    try:
        cfg = get_config()
    except ValidationError as exc:
        logger.error("Missing OPENAI_API_KEY in environment: %s", exc)
        sys.exit(1)

    port = args.port or cfg.port
    app = create_app(cfg)

    logger.info(f"Culture-date-api listening on port {port}")
    logger.info(f"模型: {cfg.openai_model}")

    uvicorn.run(app, host=args.host, port=port, log_level="info")


if __name__ == '__main__':
    main()

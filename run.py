#!/usr/bin/env python
"""
TalentBridge 后端启动脚本

用法:
    python run.py                         # 默认启动 (127.0.0.1:8000)
    python run.py -p 8080 --reload        # 指定端口并开启热重载
    python run.py --audit-sink both       # 审计事件同时写库和日志
    python run.py --log-level DEBUG
"""
import argparse
import os
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).parent
sys.path.insert(0, str(ROOT_DIR))


def parse_args():
    parser = argparse.ArgumentParser(description="TalentBridge 后端启动脚本")
    parser.add_argument("-p", "--port", type=int, default=8000, help="服务端口 (默认: 8000)")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="服务地址 (默认: 127.0.0.1)")
    parser.add_argument("--reload", action="store_true", help="开启热重载 (开发模式)")
    parser.add_argument("--workers", type=int, default=1, help="工作进程数 (默认: 1)")
    parser.add_argument(
        "--audit-sink",
        choices=["database", "log", "both"],
        help="审计事件输出位置，覆盖 AUDIT_SINK",
    )
    parser.add_argument("--log-level", type=str, help="日志级别，覆盖 LOG_LEVEL")
    return parser.parse_args()


def prepare_environment(args):
    """命令行参数写入环境变量（须在导入配置之前），并确保 SQLite 数据目录存在"""
    if args.audit_sink:
        os.environ["AUDIT_SINK"] = args.audit_sink
    if args.log_level:
        os.environ["LOG_LEVEL"] = args.log_level

    if not (ROOT_DIR / ".env").exists() and (ROOT_DIR / ".env.example").exists():
        print("⚠️  未找到 .env 文件，使用默认配置（可参考 .env.example）")

    (ROOT_DIR / "data").mkdir(parents=True, exist_ok=True)


def main():
    args = parse_args()
    prepare_environment(args)

    from talentbridge.core.config import settings

    print("=" * 50)
    print(f"  {settings.app_name}")
    print("=" * 50)
    print(f"   地址: http://{args.host}:{args.port}")
    print(f"   文档: http://{args.host}:{args.port}/docs")
    print(f"   审计输出: {settings.audit_sink}")
    print(f"   热重载: {'开启' if args.reload else '关闭'}")
    print("-" * 50)

    import uvicorn
    try:
        uvicorn.run(
            "talentbridge.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            workers=args.workers if not args.reload else 1,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        print("\n👋 服务已停止")


if __name__ == "__main__":
    main()

#!/usr/bin/env python
"""
测试运行脚本

用法:
    python tests/run_tests.py              # 全部测试
    python tests/run_tests.py services     # 仅服务层（纯函数与引擎）
    python tests/run_tests.py api -k quote # 仅 API 流程，额外参数透传给 pytest
"""
import os
import sys
import subprocess

SUITES = {
    "all": "tests/",
    "api": "tests/api/",
    "services": "tests/services/",
}


def main():
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    os.chdir(project_root)

    args = sys.argv[1:]
    suite = SUITES["all"]
    if args and args[0] in SUITES:
        suite = SUITES[args.pop(0)]

    cmd = [sys.executable, "-m", "pytest", suite, "-v", "--tb=short", *args]

    print(f"项目目录: {project_root}")
    print(f"执行命令: {' '.join(cmd)}")
    print("=" * 60)

    return subprocess.run(cmd).returncode


if __name__ == "__main__":
    sys.exit(main())

"""命令行启动

    python -m talentflow [--config config/settings.yaml] [--host 127.0.0.1] [--port 8000]
"""

import argparse

import uvicorn

from talentflow.app import create_app
from talentflow.config import AppSettings, load_yaml_config


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="talentflow", description="TalentFlow API 服务")
    parser.add_argument("--config", help="YAML 配置文件路径")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)

    settings = load_yaml_config(args.config, AppSettings) if args.config else AppSettings()
    uvicorn.run(create_app(settings), host=args.host, port=args.port)


if __name__ == "__main__":
    main()

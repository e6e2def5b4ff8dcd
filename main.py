"""
skopeo-module 실행 진입점

Usage:
    python main.py mirror app:1.0 -s src.io -d dst.io
"""

from cli.app import cli

if __name__ == "__main__":
    cli()

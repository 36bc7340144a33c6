#!/usr/bin/env python3
"""
fastawrparse 主入口脚本
使用方法:
  python main.py awrrpt_1_100_101.txt > awr.csv   # 解析报告
  python main.py -H                               # 只输出CSV表头
  python main.py --help                           # 查看帮助
"""
import sys
from pathlib import Path

# 添加src目录到Python路径
sys.path.insert(0, str(Path(__file__).parent / "src"))

from fastawrparse.cli import main

if __name__ == "__main__":
    sys.exit(main())

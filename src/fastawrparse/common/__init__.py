"""
公共配置与工具函数
"""

"""
全局配置 - AWR文本报告解析相关的常量
"""


class Config:
    """配置类 - 解析器、输出与日志使用的固定参数"""

    VERSION = "1.01"
    PROGRAM_NAME = "fastawrparse"

    # 分类器只读取文件开头的若干行
    CLASSIFIER_PEEK_LINES = 5
    HTML_MARKER = "<html"
    FOREIGN_MARKER = "STATSPACK"
    AWR_MARKER = "WORKLOAD REPOSITORY"

    # 区段结束标记（10g/11g）
    WORD_TERMINATOR = "-" * 61
    LINE_TERMINATOR = " " * 10 + "-" * 61
    # 区段结束标记（12c）
    WORD_TERMINATOR_12 = "-" * 54
    LINE_TERMINATOR_12 = " " * 26 + "-" * 45
    LINE_TERMINATOR_WIDTH = 71

    # 查找区段标题时比较的前缀长度
    OPENER_PREFIX_WIDTH = 40
    # 等待事件名称的比较宽度
    EVENT_NAME_WIDTH = 26

    # 在此行数内找不到表头分隔线则放弃该区段
    BAILOUT_LIMIT = 10
    BAILOUT_SKIP_LINES = 5
    BAILOUT_SKIP_LINES_12 = 10
    TOP_EVENT_LIMIT = 5

    # ColumnLayout 允许的列数
    MIN_LAYOUT_COLUMNS = 6
    MAX_LAYOUT_COLUMNS = 7

    # "Host Name" 数据行的固定列（从1开始，包含两端）
    HOST_NAME_COLUMNS = (1, 16)
    HOST_OS_COLUMNS = (17, 49)
    HOST_MEMORY_COLUMNS = (69, 79)

    # Instance Activity Stats 区段：统计项名称与每秒数值所在列
    ACTIVITY_NAME_WIDTH = 32
    ACTIVITY_VALUE_COLUMNS = (52, 66)
    ACTIVITY_FOOTER = " " * 10 + "-" * 22

    # 单位换算
    BYTES_PER_MIB = 1048576
    BYTES_PER_GIB = 1073741824

    # 计算精度
    WORKING_SCALE_MIB = 6
    WORKING_SCALE_LATENCY = 7
    WORKING_SCALE_PCT = 5

    # 日志配置
    LOG_LEVEL = "INFO"
    LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}"
    LOG_LEVEL_SILENT = "ERROR"
    LOG_LEVEL_VERBOSE = "DEBUG"
    LOG_LEVEL_DEBUG = "TRACE"
    LOG_ROTATION = "10 MB"
    LOG_RETENTION = "7 days"

    # 退出码
    EXIT_SUCCESS = 0
    EXIT_PARTIAL = 1
    EXIT_FAILURE = 2

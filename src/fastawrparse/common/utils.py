"""
工具函数 - 报告数值清洗与十进制运算

所有派生值统一使用 Decimal 计算：除法先截断到工作精度，
再加上目标精度最小单位的一半后截断，得到最终结果。
"""
from decimal import Decimal, InvalidOperation, ROUND_DOWN
from typing import Optional, Union

from .config import Config

Number = Union[Decimal, int, str]


def clean_number(text: Optional[str]) -> Optional[str]:
    """
    去除报告数值中的空白、回车与千位分隔符

    Examples:
        >>> clean_number(" 1,234.5 ")
        '1234.5'
        >>> clean_number("   ") is None
        True
    """
    if text is None:
        return None
    cleaned = text.replace(",", "").replace("\r", "").strip()
    return cleaned or None


def to_decimal(value: Optional[Number]) -> Optional[Decimal]:
    """
    将报告中的数值文本转换为 Decimal，无法识别时返回 None

    支持科学计数法（如 "1.2E+06"）。

    Examples:
        >>> to_decimal("1.5E+06")
        Decimal('1.5E+6')
        >>> to_decimal("n/a") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    cleaned = clean_number(value)
    if cleaned is None:
        return None
    try:
        number = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


def is_number(value: Optional[Number]) -> bool:
    """判断文本是否为可计算的数值"""
    return to_decimal(value) is not None


def truncate(value: Decimal, places: int) -> Decimal:
    """截断到指定小数位数（不做四舍五入）"""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_DOWN)


def scaled_divide(dividend: Number, divisor: Number, scale: int) -> Decimal:
    """
    除法并截断到工作精度

    Raises:
        ZeroDivisionError: 除数为0
        ValueError: 参数不是数值
    """
    a = to_decimal(dividend)
    b = to_decimal(divisor)
    if a is None or b is None:
        raise ValueError(f"无法计算非数值: {dividend!r} / {divisor!r}")
    if b == 0:
        raise ZeroDivisionError(f"除数为0: {dividend!r} / {divisor!r}")
    return truncate(a / b, scale)


def round_half_unit(value: Decimal, places: int) -> Decimal:
    """
    加上目标精度最小单位的一半后截断

    Examples:
        >>> round_half_unit(Decimal("2.34567"), 3)
        Decimal('2.346')
        >>> round_half_unit(Decimal("0.04"), 1)
        Decimal('0.0')
    """
    half = Decimal(5).scaleb(-(places + 1))
    return truncate(value + half, places)


def format_decimal(value: Optional[Decimal]) -> Optional[str]:
    """将 Decimal 格式化为不带指数的普通文本"""
    if value is None:
        return None
    return format(value, "f")


def bytes_to_mib(value: Optional[str]) -> Optional[str]:
    """
    每秒字节数换算为 MiB/s（保留2位小数）

    无法识别的数值返回 None，很小的吞吐量换算为 "0.00"。

    Examples:
        >>> bytes_to_mib("1,048,576")
        '1.00'
        >>> bytes_to_mib("2.5E+06")
        '2.38'
        >>> bytes_to_mib("1,000.0")
        '0.00'
    """
    number = to_decimal(value)
    if number is None:
        return None
    mib = scaled_divide(number, Config.BYTES_PER_MIB, Config.WORKING_SCALE_MIB)
    return format_decimal(round_half_unit(mib, 2))


def bytes_to_gib(value: Optional[str]) -> Optional[str]:
    """字节数换算为 GB（保留3位小数）"""
    number = to_decimal(value)
    if number is None:
        return None
    gib = scaled_divide(number, Config.BYTES_PER_GIB, Config.WORKING_SCALE_MIB)
    return format_decimal(round_half_unit(gib, 3))


def average_latency_ms(time_secs: Optional[str], waits: Optional[str]) -> Optional[str]:
    """
    平均等待时间(ms) = (time / waits) * 1000，保留3位小数

    waits 为0或不是数值时返回 None。

    Examples:
        >>> average_latency_ms("500", "10000")
        '50.000'
        >>> average_latency_ms("12", "0") is None
        True
    """
    time_value = to_decimal(time_secs)
    wait_value = to_decimal(waits)
    if time_value is None or wait_value is None or wait_value == 0:
        return None
    per_wait = scaled_divide(time_value, wait_value, Config.WORKING_SCALE_LATENCY) * 1000
    return format_decimal(round_half_unit(per_wait, 3))


def pct_of_db_time(time_secs: Optional[str], db_time_mins: Optional[str]) -> Optional[str]:
    """
    占 DB Time 的百分比 = (time / (db_time * 60)) * 100，保留1位小数

    DB Time 未知或为0时返回 None。

    Examples:
        >>> pct_of_db_time("1800", "30")
        '100.0'
    """
    time_value = to_decimal(time_secs)
    db_time = to_decimal(db_time_mins)
    if time_value is None or db_time is None or db_time == 0:
        return None
    ratio = scaled_divide(time_value, db_time * 60, Config.WORKING_SCALE_PCT) * 100
    return format_decimal(round_half_unit(ratio, 1))


def average_active_sessions(db_time_mins: Optional[str], elapsed_mins: Optional[str]) -> Optional[str]:
    """
    平均活动会话数 = DB Time / Elapsed，保留1位小数

    Examples:
        >>> average_active_sessions("120.0", "60.0")
        '2.0'
    """
    db_time = to_decimal(db_time_mins)
    elapsed = to_decimal(elapsed_mins)
    if db_time is None or elapsed is None or elapsed == 0:
        return None
    return format_decimal(round_half_unit(scaled_divide(db_time, elapsed, Config.WORKING_SCALE_PCT), 1))


def add_values(left: Optional[str], right: Optional[str]) -> Optional[str]:
    """两个数值相加，任意一方缺失则返回 None"""
    a = to_decimal(left)
    b = to_decimal(right)
    if a is None or b is None:
        return None
    return format_decimal(a + b)


def subtract_values(left: Optional[str], right: Optional[str]) -> Optional[str]:
    """两个数值相减，任意一方缺失则返回 None"""
    a = to_decimal(left)
    b = to_decimal(right)
    if a is None or b is None:
        return None
    return format_decimal(a - b)


def is_zero(value: Optional[str]) -> bool:
    """数值为0（含 "0.0" 等写法）"""
    number = to_decimal(value)
    return number is not None and number == 0


def slice_columns(line: str, start: int, end: int) -> str:
    """
    按1起始、包含两端的字符列截取文本并去除首尾空白

    Examples:
        >>> slice_columns("abc  def", 6, 8)
        'def'
    """
    return line[start - 1:end].strip()

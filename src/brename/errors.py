"""brename 异常类型"""


class BrenameError(Exception):
    """brename 基础异常"""


class InvalidTransitionError(BrenameError):
    """协调器状态机不允许的状态转换（调用方错误）"""

    def __init__(self, current: str, action: str):
        self.current = current
        self.action = action
        super().__init__(f"状态 {current} 下不能执行 {action}")


class PlanError(BrenameError):
    """重命名计划 JSON 无法解析"""

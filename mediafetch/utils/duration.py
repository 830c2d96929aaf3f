def format_duration(seconds: float) -> str:
    """Whole seconds as M:SS; minutes are not folded into hours"""
    total = int(seconds)
    return f"{total // 60}:{total % 60:02d}"

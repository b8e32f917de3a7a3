"""엔진 입력 검증 오류"""


class EngineInputError(ValueError):
    """파이프라인 진입 전에 거부되는 구조적으로 잘못된 입력."""

"""
plugins - 컨테이너 도구 플러그인

각 하위 패키지는 CATEGORY/TOOLS 메타데이터와 operations 모듈을 제공합니다.
"""

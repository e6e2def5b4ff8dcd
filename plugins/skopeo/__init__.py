"""
plugins/skopeo - skopeo 이미지 관리 도구

레지스트리 간 이미지 복사(미러링), 검사, 삭제

Tools:
    - Image Mirroring: 원본 레지스트리 이미지를 대상 레지스트리로 복사 (다이제스트 보존)
    - Image Inspection: 이미지 메타데이터 조회
    - Image Deletion: 레지스트리에서 이미지 삭제
    - Version: 사용 중인 skopeo 버전 확인
"""

CATEGORY = {
    "name": "skopeo",
    "display_name": "Skopeo",
    "description": "컨테이너 이미지 복사/검사/삭제",
    "description_en": "Container image copy/inspect/delete",
    "aliases": ["image", "registry"],
}

TOOLS = [
    {
        "name": "이미지 미러링",
        "name_en": "Image Mirroring",
        "description": "원본 레지스트리의 태그를 대상 레지스트리로 복사 (여러 태그 병렬)",
        "description_en": "Copy tags from a source registry to a destination registry (parallel for many tags)",
        "permission": "write",
        "module": "mirror",
        "area": "mirror",
    },
    {
        "name": "이미지 검사",
        "name_en": "Image Inspection",
        "description": "이미지 이름/태그/다이제스트/아키텍처 조회",
        "description_en": "Show image name, tag, digest and architecture",
        "permission": "read",
        "module": "inspect",
        "area": "inspect",
    },
    {
        "name": "이미지 삭제",
        "name_en": "Image Deletion",
        "description": "레지스트리에서 이미지 참조 삭제",
        "description_en": "Delete an image reference from a registry",
        "permission": "delete",
        "module": "delete",
        "area": "delete",
    },
    {
        "name": "skopeo 버전",
        "name_en": "Skopeo Version",
        "description": "skopeo 이미지 버전 확인",
        "description_en": "Show the skopeo image version",
        "permission": "read",
        "module": "version",
        "area": "version",
    },
]

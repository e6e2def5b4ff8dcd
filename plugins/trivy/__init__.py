"""
plugins/trivy - trivy 취약점 스캔 도구

Tools:
    - Image Scan: 레지스트리 이미지 취약점 스캔
"""

CATEGORY = {
    "name": "trivy",
    "display_name": "Trivy",
    "description": "컨테이너 이미지 취약점 스캔",
    "description_en": "Container image vulnerability scanning",
    "aliases": ["scan", "security"],
}

TOOLS = [
    {
        "name": "이미지 취약점 스캔",
        "name_en": "Image Vulnerability Scan",
        "description": "심각도별 취약점 스캔 (table/json/sarif 등)",
        "description_en": "Scan for vulnerabilities by severity (table/json/sarif, ...)",
        "permission": "read",
        "module": "scan",
        "area": "security",
    },
]

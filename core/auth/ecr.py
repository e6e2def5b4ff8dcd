"""
core/auth/ecr.py - ECR 로그인 비밀번호 발급

AWS 공유 자격 증명 파일 내용과 리전으로 ECR 인증 토큰을 발급받아
skopeo --src-creds AWS:<password> 에 사용할 비밀번호를 반환합니다.
(aws ecr get-login-password 와 동일한 결과)

자격 증명 파일은 임시 디렉토리에 기록한 뒤 botocore 세션의
credentials_file 설정으로 지정합니다. 프로파일을 명시적으로 설정하므로
실행 환경의 AWS_* 환경 변수보다 전달된 파일이 우선합니다.

Example:
    from core.auth.ecr import get_ecr_login_password

    password = get_ecr_login_password(creds_text, "ap-northeast-2")
"""

from __future__ import annotations

import base64
import binascii
import logging
import os
import tempfile

import boto3
import botocore.session
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    NoCredentialsError,
    PartialCredentialsError,
    ProfileNotFound,
)

from core.config import settings
from core.exceptions import APICallError, RegistryAuthError, is_access_denied

logger = logging.getLogger(__name__)

ECR_USERNAME = "AWS"
ECR_REGISTRY_LABEL = "ecr"


def decode_authorization_token(token: str) -> tuple[str, str]:
    """ECR authorizationToken 디코딩

    토큰은 base64("AWS:<password>") 형식입니다.

    Args:
        token: get_authorization_token 응답의 authorizationToken

    Returns:
        (사용자 이름, 비밀번호)

    Raises:
        RegistryAuthError: 디코딩할 수 없거나 형식이 올바르지 않은 경우
    """
    try:
        raw = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise RegistryAuthError(ECR_REGISTRY_LABEL, "authorizationToken 디코딩 실패", cause=e) from e

    user, sep, password = raw.partition(":")
    if not sep or not user or not password:
        raise RegistryAuthError(ECR_REGISTRY_LABEL, "authorizationToken 형식이 올바르지 않습니다")

    return user, password


def build_session(credentials_file: str, region: str, profile: str = "default") -> boto3.Session:
    """자격 증명 파일 경로로 boto3 Session 생성

    Args:
        credentials_file: AWS 공유 자격 증명 파일 경로
        region: AWS 리전
        profile: 사용할 프로파일

    Returns:
        boto3.Session
    """
    core_session = botocore.session.Session()
    core_session.set_config_variable("credentials_file", credentials_file)
    # 호스트의 ~/.aws/config 대신 같은 디렉토리의 (없는) config 파일을 사용
    core_session.set_config_variable("config_file", os.path.join(os.path.dirname(credentials_file), "config"))
    core_session.set_config_variable("profile", profile or "default")
    return boto3.Session(botocore_session=core_session, region_name=region)


def get_ecr_login_password(credentials: str, region: str = "", profile: str = "default") -> str:
    """ECR 로그인 비밀번호 발급

    Args:
        credentials: AWS 공유 자격 증명 파일 내용 (INI 형식)
        region: ECR 리전 (비어 있으면 설정의 기본 리전)
        profile: 자격 증명 파일 안의 프로파일

    Returns:
        ECR 레지스트리 비밀번호 (사용자 이름은 항상 "AWS")

    Raises:
        RegistryAuthError: 자격 증명이 없거나 토큰을 얻지 못한 경우
        APICallError: ECR API 호출이 실패한 경우
    """
    region = region or settings.aws_region

    if not credentials or not credentials.strip():
        raise RegistryAuthError(ECR_REGISTRY_LABEL, "AWS 자격 증명 파일이 비어 있습니다")

    with tempfile.TemporaryDirectory(prefix="skopeo-module-") as tmp_dir:
        credentials_file = os.path.join(tmp_dir, "credentials")
        with open(credentials_file, "w", encoding="utf-8") as f:
            f.write(credentials)

        try:
            session = build_session(credentials_file, region, profile)
            client = session.client("ecr", region_name=region)
            response = client.get_authorization_token()
        except (ProfileNotFound, NoCredentialsError, PartialCredentialsError) as e:
            raise RegistryAuthError(
                ECR_REGISTRY_LABEL,
                f"프로파일 '{profile}'의 자격 증명을 찾을 수 없습니다",
                cause=e,
            ) from e
        except ClientError as e:
            if is_access_denied(e):
                logger.warning(f"ECR 토큰 요청 거부: region={region}, profile={profile}")
            raise APICallError.from_client_error("ecr", "get_authorization_token", e) from e
        except BotoCoreError as e:
            raise RegistryAuthError(ECR_REGISTRY_LABEL, "ECR 토큰 요청 실패", cause=e) from e

    auth_data = response.get("authorizationData") or []
    if not auth_data:
        raise RegistryAuthError(ECR_REGISTRY_LABEL, f"{region} 리전에서 authorizationData가 비어 있습니다")

    _, password = decode_authorization_token(auth_data[0].get("authorizationToken", ""))

    logger.info(f"ECR 로그인 토큰 발급: region={region}, endpoint={auth_data[0].get('proxyEndpoint', '-')}")
    return password

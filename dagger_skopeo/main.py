"""
dagger_skopeo/main.py - 엔진 모듈 객체

엔진이 로드하는 Skopeo 객체 타입입니다. 각 함수는 plugins 계층의
skopeo/trivy 작업에 위임합니다.

Usage:
    dagger call version
    dagger call skopeo-inspect --registry docker.io --image-ref library/alpine:3.20
    dagger call mirror-many --src-registry src.io --dst-registry dst.io \\
        --repo-tags app:1.0,app:1.1 --dst-user robot --dst-pass env:DST_PASS
    dagger call scan-image --image-ref alpine:3.20 --severity HIGH,CRITICAL
"""

from typing import Annotated

import dagger
from dagger import Doc, function, object_type

from core.config import DEFAULT_INSPECT_FORMAT, DEFAULT_SEVERITY
from plugins.skopeo import operations as skopeo_ops
from plugins.trivy import operations as trivy_ops


@object_type
class Skopeo:
    """skopeo 이미지 복사/검사/삭제와 trivy 스캔 함수 모음"""

    skopeo_image_tag: Annotated[str, Doc("Version tag for quay.io/skopeo/stable")] = "latest"

    @function
    def base(
        self,
        trivy_image_tag: Annotated[str, Doc("Trivy image version tag")] = "latest",
    ) -> dagger.Container:
        """Return a Container from the official trivy image."""
        return trivy_ops.base(trivy_image_tag)

    @function
    async def scan_image(
        self,
        image_ref: Annotated[str, Doc("Reference to the image to scan")],
        severity: Annotated[str, Doc("Which severity levels to include in the scan")] = DEFAULT_SEVERITY,
        exit_code: Annotated[int, Doc("Exit code to return if vulnerabilities are found")] = 0,
        format: Annotated[str, Doc("Output format of the scan results")] = "table",
        trivy_image_tag: Annotated[str, Doc("Trivy image version tag")] = "latest",
        auth: Annotated[dagger.Secret | None, Doc("Password or token for registry authentication")] = None,
        username: Annotated[str, Doc("Username for registry authentication")] = "",
    ) -> str:
        """Scan an image ref."""
        return await trivy_ops.scan_image(
            image_ref,
            severity=severity,
            exit_code=exit_code,
            fmt=format,
            tag=trivy_image_tag,
            auth=auth,
            username=username,
        )

    @function
    async def mirror_one(
        self,
        src_registry: Annotated[str, Doc("Source registry")],
        dst_registry: Annotated[str, Doc("Destination registry")],
        repo_tag: Annotated[str, Doc("Repository and tag to mirror")],
        dst_user: Annotated[str, Doc("Destination user for authentication")] = "",
        aws_creds: Annotated[dagger.File | None, Doc("AWS credentials file used for ECR authentication")] = None,
        aws_region: Annotated[str, Doc("AWS region for ECR")] = "",
        dst_pass: Annotated[dagger.Secret | None, Doc("Destination password for authentication")] = None,
        dst_ref: Annotated[str, Doc("Destination reference for the image, if empty uses repo_tag")] = "",
        aws_pull: Annotated[bool, Doc("Whether to pull the image from AWS ECR")] = False,
    ) -> None:
        """Mirror a single image from a source registry to a destination registry."""
        await skopeo_ops.mirror_one(
            src_registry,
            dst_registry,
            repo_tag,
            dst_user=dst_user,
            dst_pass=dst_pass,
            dst_ref=dst_ref,
            aws_pull=aws_pull,
            aws_creds=aws_creds,
            aws_region=aws_region,
            tag=self.skopeo_image_tag,
        )

    @function
    async def mirror_many(
        self,
        src_registry: Annotated[str, Doc("Source registry")],
        dst_registry: Annotated[str, Doc("Destination registry")],
        repo_tags: Annotated[list[str], Doc("Repository tags to mirror")],
        dst_user: Annotated[str, Doc("Destination user for authentication")] = "",
        aws_creds: Annotated[dagger.File | None, Doc("AWS credentials file used for ECR authentication")] = None,
        aws_region: Annotated[str, Doc("AWS region for ECR")] = "",
        dst_pass: Annotated[dagger.Secret | None, Doc("Destination password for authentication")] = None,
        dst_ref: Annotated[str, Doc("Destination reference, only valid with a single tag")] = "",
        aws_pull: Annotated[bool, Doc("Whether to pull the images from AWS ECR")] = False,
        max_workers: Annotated[int, Doc("Maximum number of concurrent copies (1-100)")] = 20,
    ) -> None:
        """Mirror multiple images in parallel, stopping on the first error."""
        await skopeo_ops.mirror_many(
            src_registry,
            dst_registry,
            repo_tags,
            dst_user=dst_user,
            dst_pass=dst_pass,
            dst_ref=dst_ref,
            aws_pull=aws_pull,
            aws_creds=aws_creds,
            aws_region=aws_region,
            tag=self.skopeo_image_tag,
            max_workers=max_workers,
        )

    @function
    async def skopeo_inspect(
        self,
        image_ref: Annotated[str, Doc("Reference to the image to inspect")],
        registry: Annotated[str, Doc("Registry hosting the image")],
        format: Annotated[str, Doc("Go template format string for skopeo inspect")] = DEFAULT_INSPECT_FORMAT,
        user: Annotated[str, Doc("Registry user for authentication")] = "",
        password: Annotated[dagger.Secret | None, Doc("Registry password for authentication")] = None,
    ) -> str:
        """Inspect an image in a registry."""
        return await skopeo_ops.inspect(
            image_ref,
            registry,
            fmt=format,
            tag=self.skopeo_image_tag,
            user=user,
            password=password,
        )

    @function
    async def version(self) -> str:
        """Check version of the skopeo image used."""
        return await skopeo_ops.version(self.skopeo_image_tag)

    @function
    async def delete(
        self,
        image_ref: Annotated[str, Doc("Reference to the image to delete")],
        registry: Annotated[str, Doc("Registry hosting the image")],
        user: Annotated[str, Doc("Registry user for authentication")] = "",
        password: Annotated[dagger.Secret | None, Doc("Registry password for authentication")] = None,
    ) -> str:
        """Delete an image from a registry."""
        return await skopeo_ops.delete(
            image_ref,
            registry,
            tag=self.skopeo_image_tag,
            user=user,
            password=password,
        )

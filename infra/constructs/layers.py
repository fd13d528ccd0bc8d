import logging
import subprocess
from pathlib import Path

import jsii
from aws_cdk import BundlingOptions, ILocalBundling
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

logger = logging.getLogger(__name__)

# ローカルで試すインストーラ（先頭から順に試行）
_INSTALLERS: tuple[tuple[str, list[str]], ...] = (
    (
        "uv",
        ["uv", "pip", "install", "--python-platform", "x86_64-manylinux2014", "-r"],
    ),
    (
        "pip",
        [
            "pip",
            "install",
            "--platform",
            "manylinux2014_x86_64",
            "--only-binary=:all:",
            "-r",
        ],
    ),
)


@jsii.implements(ILocalBundling)
class PythonLocalBundling:
    """Docker を使わずにローカルで依存ライブラリをインストールする"""

    def __init__(self, source_path: str) -> None:
        self.source_path = source_path

    def try_bundle(self, output_dir: str, options: BundlingOptions) -> bool:
        """True を返すと Docker でのバンドリングをスキップする"""
        del options
        requirements_path = Path(self.source_path) / "requirements.txt"
        target_dir = Path(output_dir) / "python"

        if not requirements_path.exists():
            logger.warning("requirements.txt not found: %s", requirements_path)
            return False

        for name, command in _INSTALLERS:
            if self._install(name, command, requirements_path, target_dir):
                return True

        logger.warning("Local bundling failed, falling back to Docker")
        return False

    def _install(
        self, name: str, command: list[str], requirements_path: Path, target_dir: Path
    ) -> bool:
        try:
            logger.info("Trying local bundling with %s...", name)
            subprocess.run(
                [
                    *command,
                    str(requirements_path),
                    "--target",
                    str(target_dir),
                    "--quiet",
                ],
                check=True,
            )
        except FileNotFoundError:
            logger.debug("%s not found", name)
            return False
        except subprocess.CalledProcessError as e:
            logger.debug("%s install failed: %s", name, e)
            return False
        logger.info("Local bundling with %s succeeded", name)
        return True


class Layers(Construct):
    """Lambda Layers Construct"""

    def __init__(self, scope: Construct, id: str) -> None:
        super().__init__(scope, id)

        layer_source_path = "layers/common_layer"

        self.common_layer = _lambda.LayerVersion(
            self,
            "CommonLayer",
            code=_lambda.Code.from_asset(
                layer_source_path,
                bundling=BundlingOptions(
                    image=_lambda.Runtime.PYTHON_3_14.bundling_image,
                    command=[
                        "bash",
                        "-c",
                        "pip install -r requirements.txt -t /asset-output/python",
                    ],
                    local=PythonLocalBundling(layer_source_path),
                ),
            ),
            compatible_runtimes=[_lambda.Runtime.PYTHON_3_14],
            description="powertools, pydantic, python-jose and bcrypt",
        )

"""A setuptools setup module for lsp_to_luals"""

# Standard
import os

# Third Party
from setuptools import setup

# Read the README to provide the long description
python_base = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(python_base, "README.md"), "r") as handle:
    long_description = handle.read()

# Read version from the env
version = os.environ.get("RELEASE_VERSION", "0.0.0.dev0")

# Read in the requirements
with open(os.path.join(python_base, "requirements.txt"), "r") as handle:
    requirements = handle.read()
with open(os.path.join(python_base, "requirements-test.txt"), "r") as handle:
    test_requirements = handle.read()

setup(
    name="lsp_to_luals",
    version=version,
    description="Generate lua-language-server annotations from the LSP meta-model",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    classifiers=[
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords=["lsp", "language server protocol", "lua", "luals", "codegen"],
    packages=["lsp_to_luals"],
    install_requires=requirements,
    extras_require={"test": test_requirements},
    entry_points={
        "console_scripts": ["lsp_to_luals=lsp_to_luals.__main__:main"],
    },
)

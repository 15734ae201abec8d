# setup.py
"""
GuideRep - Guide Reputation Ledger
Complete setup configuration for installation and distribution.
"""

from setuptools import setup, find_packages
import os

# Read README for long description
this_directory = os.path.abspath(os.path.dirname(__file__))
long_description = ""
readme_path = os.path.join(this_directory, "README.md")
if os.path.exists(readme_path):
    with open(readme_path, encoding="utf-8") as f:
        long_description = f.read()

# Read requirements from requirements.txt
def read_requirements(filename):
    """Read requirements from file, ignoring comments and empty lines."""
    requirements = []
    path = os.path.join(this_directory, filename)
    if os.path.exists(path):
        with open(path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#"):
                    requirements.append(line)
    return requirements

setup(
    name="guiderep",
    version="0.1.0",
    description="Guide reputation ledger: peer-rated feedback, verification and rewards",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="GuideRep Development Team",
    author_email="guiderep-team@example.com",
    url="https://github.com/your-org/guiderep",
    license="MIT",
    # Core package structure
    packages=find_packages(where="src") + ["scripts"],
    package_dir={
        "": "src",
        "scripts": "scripts"
    },
    python_requires=">=3.10",
    install_requires=read_requirements("requirements.txt"),
    extras_require={
        "dev": read_requirements("requirements-dev.txt"),
    },
    entry_points={
        "console_scripts": [
            "guiderep-replay=scripts.guiderep_replay:main",
            "guiderep-status=scripts.guiderep_status:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Libraries",
    ],
    keywords="reputation rating verification feedback rewards",
    project_urls={
        "Documentation": "https://github.com/your-org/guiderep/blob/main/README.md",
        "Source": "https://github.com/your-org/guiderep",
        "Tracker": "https://github.com/your-org/guiderep/issues",
    },
    zip_safe=False,
)

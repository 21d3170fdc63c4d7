import setuptools
import os

# READMEファイルがあれば読み込む
long_description = ""
if os.path.exists("README.md"):
    with open("README.md", "r", encoding="utf-8") as fh:
        long_description = fh.read()

# パッケージ設定
setuptools.setup(
    name="arcpack",
    version="0.1.0",
    author="arcpack Team",
    description="Pack and unpack archives from a directory listing with external archivers",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX",
    ],
    package_dir={"": "."},
    packages=setuptools.find_packages(where=".", include=["arc*", "proc*", "logutils*", "app*"]),
    python_requires=">=3.8",
    install_requires=[
        "PySide6>=6.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "arcpack=app.lister.main:main",
        ],
    },
    include_package_data=True,
)

from setuptools import find_packages, setup
import os

HERE = os.path.abspath(os.path.dirname(__file__))


def load_requirements(path: str) -> list[str]:
    """Load requirements from a local file.

    Must work under PEP 517 isolated builds (wheel-from-sdist), so resolve the
    path relative to this file and fail gracefully if the file isn't present.
    """
    req_path = os.path.join(HERE, path)
    try:
        with open(req_path, "r", encoding="utf-8") as f:
            return [line.strip() for line in f if line.strip() and not line.startswith("#")]
    except FileNotFoundError:
        return []

data_files = ['data' + os.sep + 'homoglyphs.json', 'data' + os.sep + 'homoglyphs.txt']

setup(
    name='glyphsquat',
    version='1.2.0',
    description='Confusable homoglyph domain decoder and mutation engine',
    author='glyphsquat contributors',
    license='GPL-3.0',
    packages=find_packages(include=["glyphsquat", "glyphsquat.*"]),
    package_data={"glyphsquat": data_files},
    include_package_data=True,
    python_requires='>=3.9',
    install_requires=load_requirements("requirements.txt") or [
        'idna>=3.4',
        'python-dotenv>=1.0',
        'rich>=13.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': [
            'glyphsquat=glyphsquat.cli:main',
        ],
    }
)

from setuptools import setup, find_packages


setup(
    name="aont",
    version="0.1",
    packages=find_packages(include=["aont", "aont.*"]),
    description="Rivest's all-or-nothing transform with pluggable block hashes.",
    author="vercingetorx",
    python_requires=">=3.8",
    install_requires=[
        "pycryptodomex>=3.23.0",
        "argon2-cffi>=23.1.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "aont=aont.cli:main",
        ]
    },
)

from setuptools import setup, find_packages

setup(
    name="hyperfine_qed",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy>=1.21.0",
        "matplotlib>=3.4.0",
        "scipy>=1.7.0",
        "qutip>=5.0",
        "sympy>=1.9",
    ],
    extras_require={
        "dev": ["pytest", "black", "mypy", "pylint"],
    },
    entry_points={
        "console_scripts": ["hyperfine-qed=hyperfine_qed.__main__:main"],
    },
    python_requires=">=3.9",
)

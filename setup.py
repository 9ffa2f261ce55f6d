from setuptools import setup

setup(
    name="handPlayback",
    version="0.1.0",
    description="Playback and interpolation engine for recorded hand-tracking poses, with a Qt OpenGL viewer.",
    packages=["handPlayback"],
    include_package_data=True,
    install_requires=[
        "numpy",
        "PyQt5",
        "PyOpenGL",
        "zstandard",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "handplayback=handPlayback.vizApp:main",
        ],
    },
    python_requires=">=3.8",
)

from setuptools import setup, find_packages

setup(
    name='osctree',
    version='0.1.0',
    description='OSC (Open Sound Control) packets as trees, with a bidirectional wire codec',
    packages=find_packages(include=['osctree', 'osctree.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy',
    ],
    extras_require={
        'test': ['pytest'],
    },
)

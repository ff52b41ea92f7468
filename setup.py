from setuptools import setup, find_packages

setup(
    name             = 'spamguard',
    version          = '1.0.0',
    description      = 'SpamGuard — Offline heuristic SMS spam scorer',
    author           = 'SpamGuard contributors',
    packages         = find_packages(exclude=['tests*']),
    install_requires = open('requirements.txt').read().splitlines(),
    extras_require   = {
        'test': ['pytest>=7', 'httpx>=0.24'],
    },
    entry_points     = {
        'console_scripts': [
            'spamguard     = spamguard.cli:main',
            'spamguard-api = spamguard.api:main',
        ],
    },
    python_requires  = '>=3.10',
    classifiers      = [
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
)

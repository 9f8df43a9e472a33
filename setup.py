from setuptools import setup

setup(
    name='btc-explorer',
    version='0.1.0',
    description='Read-only HTTP API over a Bitcoin node\'s JSON-RPC interface',
    packages=['explorer_api'],
    python_requires='>=3.8',
    install_requires=[
        'connexion[flask,uvicorn]>=3.0',
        'flask',
        'starlette',
        'requests',
        'click',
        'termcolor'
    ],
    extras_require={
        'test': [
            'pytest',
            'mock',
            'httpx'
        ]
    },
    entry_points={
        'console_scripts': [
            'btc-explorer = explorer_api.cli:cli'
        ]
    },
    package_data={'explorer_api': ['*.yaml']},
    include_package_data=True,
    zip_safe=False,
)

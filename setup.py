from setuptools import setup, find_packages

setup(
    name='blocks_world_planner',
    version='0.1.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'blocks_world_planner.envs': ['configs/*.yaml', 'configs/tasks/*.yaml'],
    },
    install_requires=[
        'gymnasium',
        'numpy',
        'pyyaml',
    ],
    extras_require={
        'test': ['pytest'],
    },
)

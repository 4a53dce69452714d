from setuptools import find_packages, setup
import os
from glob import glob

package_name = 'waypoint_nav'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(include=[package_name, f'{package_name}.*']),
    data_files=[
        ('share/ament_index/resource_index/packages',
         ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
        # Include launch and config files
        (os.path.join('share', package_name, 'launch'), glob('waypoint_nav/launch/*.py')),
        (os.path.join('share', package_name, 'config'), glob('config/*.yaml')),
    ],
    install_requires=['setuptools', 'numpy', 'scipy', 'PyYAML'],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='Uluhan Cem Kaya',
    maintainer_email='uluhancem.kaya@uta.edu',
    description='ROS 2 waypoint-tracking PID navigator with body-frame velocity output.',
    license='MIT',
    entry_points={
        'console_scripts': [
            'navigator_node = waypoint_nav.navigation.navigator_node:main',
        ],
    },
)

from setuptools import find_packages, setup

package_name = 'ink_ribbon'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['test']),
    py_modules=['ribbon_preview'],
    python_requires='>=3.8',
    install_requires=['setuptools', 'numpy', 'shapely', 'matplotlib'],
    zip_safe=True,
    maintainer='david',
    maintainer_email='david@todo.todo',
    description='Pressure-sensitive stroke outlines and eraser splitting for freehand ink',
    license='MIT',
    extras_require={
    'test': [
    'pytest',
    ],
    },
    entry_points={
        'console_scripts': [
            'ribbon_preview = ribbon_preview:main',
        ],
    },
)

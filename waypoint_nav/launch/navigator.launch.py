from launch import LaunchDescription
from launch_ros.actions import Node
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration


def generate_launch_description():
    return LaunchDescription([
        DeclareLaunchArgument(
            'nav_param_file',
            default_value='navigator.yaml',
            description='Navigator parameter file inside config/'
        ),
        DeclareLaunchArgument('tolerance', default_value='0.15'),
        DeclareLaunchArgument('yaw_tolerance', default_value='0.05'),

        Node(
            package='waypoint_nav',
            executable='navigator_node',
            name='navigator',
            output='screen',
            parameters=[{
                'nav_param_file': LaunchConfiguration('nav_param_file'),
                'tolerance': LaunchConfiguration('tolerance'),
                'yaw_tolerance': LaunchConfiguration('yaw_tolerance'),
            }]
        ),
    ])

# waypoint_nav/navigation/navigator_node.py
from __future__ import annotations
import os
import rclpy
from rclpy.node import Node
from rclpy.qos import QoSProfile, ReliabilityPolicy, HistoryPolicy, DurabilityPolicy
from rcl_interfaces.msg import ParameterDescriptor

from geometry_msgs.msg import PoseStamped, Twist, TwistStamped
from trajectory_msgs.msg import MultiDOFJointTrajectory
from std_msgs.msg import Bool, UInt8
from std_srvs.srv import Trigger

from ament_index_python.packages import get_package_share_directory

from waypoint_nav.utils.param_loader import ParamLoader, tolerance_from_values
from waypoint_nav.utils.param_types import ToleranceParams
from waypoint_nav.utils.helper_functions import quat_to_yaw
from waypoint_nav.navigation.navigator import Navigator
from waypoint_nav.navigation.nav_types import Waypoint, PoseEstimate, VelocityCommand
from waypoint_nav.navigation.waypoint_queue import EmptyTrajectoryError


class NavigatorNode(Node):
    def __init__(self):
        super().__init__("navigator")

        # ------- params -------
        self.declare_parameter('nav_param_file', 'navigator.yaml')

        package_dir = get_package_share_directory('waypoint_nav')
        nav_param_file = self.get_parameter('nav_param_file').get_parameter_value().string_value
        nav_yaml_path = os.path.join(package_dir, 'config', nav_param_file)

        nav_yaml = ParamLoader(nav_yaml_path)
        ok, msg = nav_yaml.validate()
        if not ok:
            self.get_logger().error(f"[Navigator] Invalid parameters in {nav_yaml_path}: {msg}")
            raise ValueError(msg)
        self.params = nav_yaml.get_navigator_params()
        self.get_logger().info(f"[Navigator] Parameters valid: {msg}")

        # tolerances stay live ROS params: re-read on every trajectory.
        # dynamic_typing lets integer overrides such as tolerance:=1 through
        any_number = ParameterDescriptor(dynamic_typing=True)
        self.declare_parameter('tolerance', self.params.tolerance.position, any_number)
        self.declare_parameter('yaw_tolerance', self.params.tolerance.yaw, any_number)

        self.throttle_sec = float(self.params.warn_throttle_sec)

        # ------- core -------
        self.nav = Navigator(self.params)
        self.prev_state = self.nav.state

        # ------- IO -------
        topics = self.params.topics

        traj_qos = QoSProfile(
            reliability=ReliabilityPolicy.RELIABLE,
            durability=DurabilityPolicy.VOLATILE,
            history=HistoryPolicy.KEEP_LAST,
            depth=1
        )

        state_qos = QoSProfile(
            reliability=ReliabilityPolicy.RELIABLE,
            durability=DurabilityPolicy.TRANSIENT_LOCAL,  # latch last state
            history=HistoryPolicy.KEEP_LAST,
            depth=1
        )

        self.create_subscription(PoseStamped, topics.pose_topic, self._pose_cb, 5)
        self.create_subscription(MultiDOFJointTrajectory, topics.waypoints_topic, self._waypoints_cb, traj_qos)

        self.vel_pub = self.create_publisher(Twist, topics.cmd_vel_topic, 5)
        self.stamped_vel_pub = self.create_publisher(TwistStamped, topics.cmd_vel_stamped_topic, 5)
        self.goal_reached_pub = self.create_publisher(Bool, topics.goal_reached_topic, 1)
        self.nav_state_pub = self.create_publisher(UInt8, topics.nav_state_topic, state_qos)

        # Services
        self.cancel_srv = self.create_service(Trigger, 'navigator/cancel', self._srv_cancel)

        # initial publishes
        self._publish_nav_state()

        self.get_logger().info("NavigatorNode ready.")

    # ---------- callbacks ----------
    def _waypoints_cb(self, msg: MultiDOFJointTrajectory):
        waypoints = []
        try:
            for i, point in enumerate(msg.points):
                if not point.transforms:
                    self.get_logger().warn(f"[Navigator] Trajectory point {i} has no transform; skipping it.")
                    continue
                tf = point.transforms[0]
                q = tf.rotation
                waypoints.append(Waypoint.from_xyzyaw(
                    tf.translation.x, tf.translation.y, tf.translation.z,
                    quat_to_yaw([q.x, q.y, q.z, q.w]),
                ))
            first = self.nav.on_trajectory(waypoints, tolerance=self._read_tolerance())
        except EmptyTrajectoryError as e:
            self.get_logger().warn(f"[Navigator] Rejected trajectory: {e}. Staying in {self.nav.state.name}.")
            return
        except ValueError as e:
            self.get_logger().error(f"[Navigator] Rejected trajectory: {e}")
            return

        self.get_logger().info(f"[Navigator] {len(waypoints)} waypoints received")
        self.get_logger().info(
            f"[Navigator] First goal (x,y,z,yaw): ({first.position[0]:.2f}, {first.position[1]:.2f}, "
            f"{first.position[2]:.2f}, {first.yaw:.2f})")
        self._check_state_change()

    def _pose_cb(self, msg: PoseStamped):
        q = msg.pose.orientation
        try:
            yaw = quat_to_yaw([q.x, q.y, q.z, q.w])
        except ValueError as e:
            self.get_logger().warn(f"[Navigator] Bad pose orientation: {e}",
                                   throttle_duration_sec=self.throttle_sec)
            return

        pose = PoseEstimate(
            position=(msg.pose.position.x, msg.pose.position.y, msg.pose.position.z),
            yaw=yaw,
            stamp=self.get_clock().now().nanoseconds * 1e-9,
        )

        out = self.nav.on_pose(pose)

        if out.skipped == "no_trajectory":
            self.get_logger().warn("[Navigator] Waypoints not received. Skipping current pose...",
                                   throttle_duration_sec=self.throttle_sec)
            return
        if out.skipped == "non_finite_pose":
            self.get_logger().warn("[Navigator] Non-finite pose estimate. Skipping current pose...",
                                   throttle_duration_sec=self.throttle_sec)
            return

        if out.advanced:
            g = self.nav.current_goal
            self.get_logger().info("[Navigator] Error in accepted range. Next waypoint.")
            self.get_logger().info(
                f"[Navigator] Next goal {out.waypoint_number}/{self.nav.queue.total_count()} "
                f"(x,y,z,yaw): ({g.position[0]:.2f}, {g.position[1]:.2f}, {g.position[2]:.2f}, {g.yaw:.2f})")

        if out.goal_reached:
            self.get_logger().info("[Navigator] Final waypoint reached. Hovering...")
            feedback = Bool()
            feedback.data = True
            self.goal_reached_pub.publish(feedback)

        self._check_state_change()

        if out.command is not None:
            self._publish_cmd(out.command)

    # ---------- services ----------
    def _srv_cancel(self, req, resp):
        self.nav.cancel()
        self._check_state_change()
        resp.success = True
        resp.message = "Trajectory cancelled."
        return resp

    # ---------- utils ----------
    def _read_tolerance(self) -> ToleranceParams:
        return tolerance_from_values(
            self.get_parameter('tolerance').value,
            self.get_parameter('yaw_tolerance').value,
        )

    def _check_state_change(self):
        state = self.nav.state
        if state != self.prev_state:
            self.get_logger().info(f"State: {self.prev_state.name} -> {state.name}")
            self.prev_state = state
            self._publish_nav_state()

    def _publish_nav_state(self):
        msg = UInt8()
        msg.data = int(self.nav.state.value)
        self.nav_state_pub.publish(msg)

    def _publish_cmd(self, cmd: VelocityCommand):
        linear, angular = cmd.twist_components()
        twist = Twist()
        twist.linear.x, twist.linear.y, twist.linear.z = linear
        twist.angular.x, twist.angular.y, twist.angular.z = angular

        stamped = TwistStamped()
        stamped.header.stamp = self.get_clock().now().to_msg()
        stamped.twist = twist

        self.vel_pub.publish(twist)
        self.stamped_vel_pub.publish(stamped)


def main(args=None):
    rclpy.init(args=args)
    node = NavigatorNode()
    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    node.destroy_node()
    rclpy.shutdown()

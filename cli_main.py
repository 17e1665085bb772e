from wsn_analyzer.controllers.system_controller import SystemController
from wsn_analyzer.config.analyzer_config import load_config
from wsn_analyzer.utils.logger.logger import Logger
import argparse
import sys


def main(argv=None):
    """
    Entry point to the WSN Analyzer CLI.
    """
    parser = argparse.ArgumentParser(prog="wsn-analyzer", description="WSN articulation point analyzer")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--load", help="graph file to load instead of the demo deployment")
    parser.add_argument(
        "--log-level",
        choices=[priority.name.lower() for priority in Logger.LogPriority],
        default="debug",
        help="lowest log priority written to the log file",
    )
    args = parser.parse_args(argv)

    try:
        # CONFIGURES LOGGER WITH DEFAULT FILE STORAGE
        Logger.initialize()
        Logger.set_min_priority(args.log_level)
        Logger.log("WSN Analyzer CLI starting...")

        config = load_config(args.config) if args.config else None

        # INITIALIZE THE SYSTEM CONTROLLER
        controller = SystemController(config=config)
        if args.load:
            controller.input_network(args.load)
        else:
            controller.load_default_scenario()
        Logger.log("System controller initialized successfully")

        # START THE CLI VIEW
        controller.initiate_view("cli")

    except KeyboardInterrupt:
        print("\n>>> Application interrupted by user")
        sys.exit(0)
    except Exception as ex:
        print(f">>> Fatal error: {ex}")
        Logger.log(f"Fatal error in CLI main: {ex}", Logger.LogPriority.ERROR)
        sys.exit(1)


if __name__ == "__main__":
    main()

from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.views.cli_view.cli_view import CommandLineView


class ViewRequestInterpreter:
    """Maps a view name onto its ViewStrategy class."""

    VIEW_STRATEGIES = {
        CommandLineView.name: CommandLineView,
    }

    def get_view_strategy(self, view_request, controller):
        """
        Args:
            view_request (str): View name, case-insensitive ("cli").
            controller: SystemController the view will drive.

        Raises:
            ValueError: If no view is registered under that name.
        """
        Logger.log(f"start get_view_strategy(self, {view_request})")
        view_class = self.VIEW_STRATEGIES.get(str(view_request).strip().lower())
        if view_class is None:
            available = ", ".join(sorted(self.VIEW_STRATEGIES))
            Logger.log(f"Invalid view request: {view_request}", Logger.LogPriority.ERROR)
            raise ValueError(f"Invalid view request '{view_request}'. Available views: {available}")
        Logger.log(f"end get_view_strategy(self, view_request) -> {view_class.__name__}")
        return view_class(controller)

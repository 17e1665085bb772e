from wsn_analyzer.utils.logger.logger import Logger
from .view_request_interpreter import ViewRequestInterpreter


class ViewManager:
    """Owns the active view. Switching views stops the previous one first."""

    def __init__(self, controller):
        self.controller = controller
        self.interpreter = ViewRequestInterpreter()
        self.active_view = None

    def initiate_view_strategy(self, view, controller=None):
        """
        Build the view registered as `view`, stop the active one and start the new one.

        Raises:
            ValueError: If the view request is invalid. The active view keeps running.
        """
        Logger.log(f"start initiate_view_strategy(self, {view})")
        new_view = self.interpreter.get_view_strategy(view, controller or self.controller)
        self.stop_active_view()
        self.active_view = new_view
        Logger.log(f"starting view {type(new_view).__name__}", Logger.LogPriority.INFO)
        new_view.start_view()
        Logger.log("end initiate_view_strategy(self, view)")

    def stop_active_view(self):
        if self.active_view is not None and self.active_view.running:
            Logger.log(f"stopping view {type(self.active_view).__name__}")
            self.active_view.stop_view()
        self.active_view = None

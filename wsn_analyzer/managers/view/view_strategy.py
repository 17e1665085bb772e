class ViewStrategy:
    """
    Presentation layer driven by a SystemController.

    ViewManager builds the view and calls start_view(), which may block until
    the user quits. stop_view() is called when the view is replaced or closed
    and must leave `running` False.
    """

    # registry key used by ViewRequestInterpreter
    name = None

    def __init__(self, controller):
        self.controller = controller
        self.running = False

    def start_view(self):
        raise NotImplementedError()

    def stop_view(self):
        raise NotImplementedError()

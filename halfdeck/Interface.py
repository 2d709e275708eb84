from halfdeck.Core import Core, GameEvent


class Interface:

    def __init__(self):
        self.core: Core = None

    def onStart(self):
        pass

    def onEvent(self, event: GameEvent):
        """Invoked when a game event changed the board."""
        self.notifyRedraw()

    def notifyRedraw(self):
        pass

    def onWin(self):
        pass

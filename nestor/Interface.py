from nestor.Core import Core, GameEvent, TurnResult


class Interface:

    def __init__(self):
        self.core: Core = None

    def onStart(self):
        pass

    def onEvent(self, event: GameEvent):
        """
        Invoked when a match removed cards from the board.
        :param event:
        :return:
        """
        pass

    def onReject(self, result: TurnResult):
        """
        Invoked when a turn left the board unchanged (invalid, empty or non-matching selection).
        :param result:
        :return:
        """
        pass

    def notifyRedraw(self):
        pass

    def onWin(self):
        pass


class Player:
    """Supplies selections to the game loop."""

    def readInteger(self, prompt: str) -> int:
        raise NotImplementedError

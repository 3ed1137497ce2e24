"""Test doubles shared by the controller/dictation tests."""


class FakeEngine:
    def __init__(self, *, fail_start=False):
        self.fail_start = fail_start
        self.starts = 0
        self.stops = 0

    def start(self):
        self.starts += 1
        if self.fail_start:
            raise RuntimeError("engine busy")

    def stop(self):
        self.stops += 1


class FakeTarget:
    def __init__(self, text=""):
        self._text = text
        self.listening = False
        self.submitted = []

    def text(self):
        return self._text

    def set_text(self, text):
        self._text = text

    def set_listening(self, listening):
        self.listening = listening

    def submit(self):
        self.submitted.append(self._text)
        self._text = ""


class FakePrompts:
    def __init__(self, *, confirm=True, answer=None):
        self.answer_confirm = confirm
        self.answer = answer
        self.confirms = []
        self.notices = []
        self.questions = []

    def confirm(self, message):
        self.confirms.append(message)
        return self.answer_confirm

    def notify(self, message):
        self.notices.append(message)

    def ask_text(self, message):
        self.questions.append(message)
        return self.answer


class FakeHandle(FakeTarget):
    """Section handle that can also host a dictation session."""

    def __init__(self, section_id):
        super().__init__()
        self.id = section_id


class FakeView:
    """SectionsView recording every call."""

    def __init__(self):
        self.calls = []
        self.rendered = {}

    def create_section(self, section, index):
        self.calls.append(("create", section.id, index))
        return FakeHandle(section.id)

    def remove_section(self, handle):
        self.calls.append(("remove", handle.id))

    def rebuild_notes(self, handle, section_id, notes):
        self.calls.append(("notes", section_id))
        self.rendered[section_id] = [(n.id, n.completed) for n in notes]


class RecordingRunner:
    """SaveScheduler runner that holds saves until finish() is called."""

    def __init__(self):
        self.sent = []
        self._done = []

    def __call__(self, doc, done):
        self.sent.append(doc)
        self._done.append(done)

    def finish(self, ok=True):
        done = self._done.pop(0)
        done(ok)

    @property
    def in_flight(self):
        return len(self._done)

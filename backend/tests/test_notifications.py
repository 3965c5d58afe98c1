from sitesnap.notifications import TOAST_DURATION_MS, Toaster


def test_toasts_are_transient():
    toaster = Toaster()
    toast = toaster.error("Please complete the CAPTCHA verification")
    assert toast.duration == TOAST_DURATION_MS
    assert toaster.success("done").duration == TOAST_DURATION_MS


def test_loading_toast_persists_until_dismissed():
    toaster = Toaster()
    toast = toaster.loading("Capturing...")
    assert toast.duration is None
    toaster.dismiss(toast)
    assert toaster.toasts == []
    assert toaster.last is None

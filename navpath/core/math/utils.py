def hsl_to_hsv(h: float, s: float, l: float) -> tuple[float, float, float]:
    # Input: h in degrees, s and l in [0,1]
    # Output: (h, s, v) with h in degrees, s and v in [0,1]
    if not (0.0 <= s <= 1.0 and 0.0 <= l <= 1.0):
        raise ValueError("s and l must be in [0,1].")
    v = l + s * min(l, 1.0 - l)
    sv = 0.0 if v == 0.0 else 2.0 * (1.0 - l / v)
    return h, sv, v


def hsl_to_hsv_255(h: float, s: float, l: float) -> tuple[int, int, int]:
    # Input: h in degrees, s and l in [0,1]
    # Output: (h, s, v) with h in [0,359], s and v in [0,255] (ints)
    hh, sv, v = hsl_to_hsv(h, s, l)
    h_int = int(round(hh)) % 360
    s_int = max(0, min(255, int(round(sv * 255.0))))
    v_int = max(0, min(255, int(round(v * 255.0))))
    return h_int, s_int, v_int

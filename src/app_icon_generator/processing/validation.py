"""已写出图标的质量指标。

参照图是源图按同一尺寸重新做一次 cover 渲染的结果，因此指标衡量的是写出的
文件（圆形遮罩、背景铺底、PNG 编码之后）与应得的方形图标之间的差异。
pHash 距离范围 0~64，0 表示一致；SSIM 为高斯窗口均值，1 表示一致。
"""

from __future__ import annotations

from dataclasses import dataclass

import cv2
import numpy as np
from PIL import Image

from app_icon_generator.processing.rendering import render_cover

HASH_SAMPLE = 32
HASH_BITS = 8
SSIM_SIGMA = 1.5
SSIM_C1 = (0.01 * 255) ** 2
SSIM_C2 = (0.03 * 255) ** 2


@dataclass(slots=True, frozen=True)
class IconMetrics:
    phash_distance: float
    ssim: float


def measure_icon(source: Image.Image, icon: Image.Image) -> IconMetrics:
    """将图标与同尺寸的 cover 参照图对比。"""

    reference = render_cover(source, icon.width)
    try:
        expected = _luma(reference)
    finally:
        reference.close()
    actual = _luma(icon)

    distance = np.count_nonzero(_perceptual_hash(expected) != _perceptual_hash(actual))
    return IconMetrics(phash_distance=float(distance), ssim=_windowed_ssim(expected, actual))


def has_full_bleed(image: Image.Image) -> bool:
    """检查图标四条边是否都包含不透明像素（即没有 contain 模式留下的透明边）。"""

    if image.mode != "RGBA":
        return True

    alpha = np.asarray(image.getchannel("A"))
    edges = (alpha[0, :], alpha[-1, :], alpha[:, 0], alpha[:, -1])
    return all(edge.max() > 0 for edge in edges)


def _luma(image: Image.Image) -> np.ndarray:
    return np.asarray(image.convert("L"), dtype=np.float32)


def _perceptual_hash(gray: np.ndarray) -> np.ndarray:
    sample = cv2.resize(gray, (HASH_SAMPLE, HASH_SAMPLE), interpolation=cv2.INTER_AREA)
    low_freq = cv2.dct(sample)[:HASH_BITS, :HASH_BITS]
    # 直流分量不参与中位数
    return low_freq > np.median(low_freq.flatten()[1:])


def _windowed_ssim(expected: np.ndarray, actual: np.ndarray) -> float:
    def blur(values: np.ndarray) -> np.ndarray:
        return cv2.GaussianBlur(values, (0, 0), SSIM_SIGMA)

    mu_e = blur(expected)
    mu_a = blur(actual)
    var_e = blur(expected * expected) - mu_e * mu_e
    var_a = blur(actual * actual) - mu_a * mu_a
    covariance = blur(expected * actual) - mu_e * mu_a

    numerator = (2 * mu_e * mu_a + SSIM_C1) * (2 * covariance + SSIM_C2)
    denominator = (mu_e * mu_e + mu_a * mu_a + SSIM_C1) * (var_e + var_a + SSIM_C2)
    return float(np.clip((numerator / denominator).mean(), -1.0, 1.0))

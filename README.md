# astrolens

Tools for bending images with a radial polynomial lens model, and for
scoring how straight a coloured test line in an image becomes under a
given set of lens coefficients.

## Install

    pip install .

For the tests:

    pip install ".[test]"
    pytest

## Library

`astrolens.numeric` holds the lens polynomial and its helpers:

- `func(r, coef)`: the mapped radius `c2*r**3 + c1*r**2 + c0*r`
- `cont_test_sign(r_max, coef)`: the smallest derivative of that
  polynomial on `[0, r_max]`; it is negative when the mapping folds over
  (if `c0` is negative, `c0` itself is returned)
- `binpow(x, n)`: integer power by repeated squaring (`n >= 0`)
- `round_coefficients(coef)`: rounds to eight decimal places, halves away
  from zero
- `sqr(x)`

`astrolens.imaging` works on images:

- `SmartImage`: an RGBA image with a pivot at its centre, built black with
  `SmartImage(width, height)` or loaded with `SmartImage.from_file(path)`
  (which raises `ImageLoadError` when the file cannot be read). It has
  `size`, `get_pixel(x, y)`, `set_pixel(x, y, color)`, `save(path)` and
  `init_new_r(coef)`, which fills the `precalc` table of radial scale
  factors.
- `NumColor`: an RGBA colour; `*` scales it, `+` adds saturating at 255,
  and `-` gives the sum of absolute RGB differences.
- `distorce(image, coef)`: remaps every pixel radially with the
  polynomial; pixels with no source stay black.
- `distorce_dirch(image, f, k)`: a fisheye-style remap with focal length
  `f` and curvature `k` (`k == 0` equidistant, `k > 0` tan, `k < 0` sin;
  `f = 0` picks one from the image size).
- `test_distorce(image, test_color)`: the residual of a least-squares line
  through the pixels within 30 of `test_color` (smaller is straighter; the
  largest float when fewer than five pixels match).
- `interpolation(x, y, image)`: bilinear sampling.

`astrolens.objectives` wraps an image and a test colour in a
`DistortionTarget(image, test_color, image_path="image", cache_dir="out")`
(or `DistortionTarget.from_file(path, test_color, cache_dir)`), and offers
`objective`, `count_constraint`, `lower_r`, `upper_r` and
`sign_constraint`, each taking the coefficients and the target. Distorted
images are cached as `<image_path>_<c0>_<c1>_<c2>.png` in the cache
directory and read back from there on later calls. Values are reported
through the `logging` module.

`astrolens.rosenbrock` has `rosenbrock(x)`, `upper_constraint(x)` and
`minimize(start)`, which runs SciPy's COBYLA and raises
`OptimizationError` when it does not succeed.

## Commands

    astrolens-rosenbrock

minimises the Rosenbrock function in `[-10, 10]²` under the constraint
`x[1] >= 5`, starting from `(1.234, 5.678)`, and prints the minimum.

    astrolens-flip [source] [destination]

mirrors an image left to right; by default it reads `image.jpg` and
writes `new_image.jpg` in the current directory.

## What it does not do

There is no command that searches for the lens coefficients of an image:
the objective and constraint functions are provided, but wiring them to
an optimiser is left to the caller. Nothing is displayed on screen.